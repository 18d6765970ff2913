from __future__ import annotations

from remote_ui.objects import APPLICATION_ID


def _sets(transport):
    return [m for m in transport.sent if m.get("type") == "set"]


def test_local_change_sends_set(established, transport):
    established.handle({"type": "create", "class": "Entry", "id": 1000})
    entry = established.registry.lookup(1000)

    entry.set_property("text", "typed")

    assert _sets(transport) == [{"type": "set", "id": 1000, "name": "text", "value": "typed"}]


def test_unchanged_value_sends_nothing(established, transport):
    established.handle({"type": "create", "class": "Entry", "id": 1000})
    entry = established.registry.lookup(1000)
    entry.set_property("text", "")
    assert _sets(transport) == []


def test_changes_during_dispatch_are_flushed_after(established, transport):
    established.handle({"type": "create", "class": "Box", "id": 1000})
    established.handle({"type": "create", "class": "Label", "id": 1001})
    transport.sent.clear()
    label = established.registry.lookup(1001)
    observed = []
    label.events.property_changed.connect(
        lambda event: observed.append((len(_sets(transport)), established.notifier.pending))
    )

    established.handle(
        [
            {"type": "action", "id": 1000, "name": "show", "args": []},
            {"type": "action", "id": 1001, "name": "show", "args": []},
        ]
    )

    # the box change was queued, not sent, when the label changed
    assert len(observed) == 1
    sent_at_change, pending_at_change = observed[0]
    assert sent_at_change == 0
    assert pending_at_change >= 1
    assert established.notifier.pending == 0
    assert [(m["id"], m["name"]) for m in _sets(transport)] == [(1000, "visible"), (1001, "visible")]


def test_queued_order_is_preserved(established, transport):
    established.handle({"type": "create", "class": "Label", "id": 1000})
    transport.sent.clear()
    label = established.registry.lookup(1000)

    with established.notifier.deferred():
        label.set_property("text", "one")
        label.set_property("wrap", True)
        assert established.notifier.pending == 2
        assert _sets(transport) == []

    assert [(m["name"], m["value"]) for m in _sets(transport)] == [("text", "one"), ("wrap", True)]


def test_object_valued_property_is_not_sent(established, transport):
    established.handle({"type": "create", "class": "Label", "id": 1000})
    established.handle({"type": "action", "id": 1000, "name": "setText", "args": [{"id": APPLICATION_ID}]})
    assert established.established
    assert _sets(transport) == []


def test_server_set_is_echoed(established, transport):
    established.handle({"type": "create", "class": "Label", "id": 1000})
    established.handle({"type": "set", "id": 1000, "name": "text", "value": "hi"})
    assert _sets(transport) == [{"type": "set", "id": 1000, "name": "text", "value": "hi"}]


def test_changes_after_close_are_dropped(established, transport):
    established.handle({"type": "create", "class": "Label", "id": 1000})
    label = established.registry.lookup(1000)
    transport.sent.clear()
    established.handle({"type": "close"})

    label.set_property("text", "late")

    assert _sets(transport) == []


def test_queue_dropped_when_dispatch_closes_session(established, transport):
    established.handle({"type": "create", "class": "Label", "id": 1000})
    transport.sent.clear()
    established.handle(
        [
            {"type": "set", "id": 1000, "name": "text", "value": "hi"},
            {"type": "error", "msg": "bad"},
        ]
    )
    assert established.closed
    assert established.notifier.pending == 0
    assert _sets(transport) == []


def test_singleton_changes_are_not_forwarded(established, transport):
    app = established.registry.lookup(APPLICATION_ID)
    app.set_property("name", "local")
    assert _sets(transport) == []
