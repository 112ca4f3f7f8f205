import threading

from PIL import Image

from image_relay.client.display import LatestImageSlot, placeholder_image


def test_newer_image_supersedes_unread_one():
    slot = LatestImageSlot()
    first = Image.new("RGB", (1, 1))
    second = Image.new("RGB", (2, 2))

    slot.show(first)
    slot.show(second)

    assert slot.take() is second
    assert slot.take() is None
    assert slot.peek() is second
    assert slot.shown == 2


def test_initial_image_is_pending():
    initial = placeholder_image(240, 240)
    slot = LatestImageSlot(initial)

    assert slot.take() is initial
    assert slot.shown == 0
    assert initial.getpixel((0, 0)) == (0, 0, 255)


def test_concurrent_producer_and_consumer():
    slot = LatestImageSlot()
    images = [Image.new("RGB", (n + 1, 1)) for n in range(200)]
    received = []

    def produce():
        for image in images:
            slot.show(image)

    producer = threading.Thread(target=produce)
    producer.start()
    while producer.is_alive():
        image = slot.take()
        if image is not None:
            received.append(image)
    producer.join()
    leftover = slot.take()
    if leftover is not None:
        received.append(leftover)

    widths = [image.width for image in received]
    assert widths == sorted(widths)
    assert received[-1] is images[-1]
