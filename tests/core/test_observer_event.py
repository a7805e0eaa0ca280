from bookshop.core.events import ObserverEvent


def test_failing_subscriber_does_not_stop_others():
    event = ObserverEvent("Test")
    received = []

    def broken(value):
        raise RuntimeError("boom")

    event.connect(broken)
    event.connect(received.append)
    event.emit(42)

    assert received == [42]


def test_connect_is_idempotent_and_disconnect_removes():
    event = ObserverEvent("Test")
    received = []
    event.connect(received.append)
    event.connect(received.append)
    assert event.subscriber_count == 1

    event.disconnect(received.append)
    event.emit(1)
    assert received == []
