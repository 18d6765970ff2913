from __future__ import annotations

from remote_ui import launcher


def test_main_applies_cli_overrides(monkeypatch):
    captured = {}

    def fake_launch(config, debug=False):
        captured["config"] = config
        captured["debug"] = debug
        return 0

    monkeypatch.setenv("REMOTE_UI_HOST", "env-host")
    monkeypatch.setenv("REMOTE_UI_PORT", "7000")
    monkeypatch.setattr(launcher, "launch_client", fake_launch)

    assert launcher.main(["--port", "9100", "--path", "ui", "--debug"]) == 0
    config = captured["config"]
    assert config.host == "env-host"
    assert config.port == 9100
    assert config.url == "ws://env-host:9100/ui"
    assert captured["debug"] is True


def test_launch_client_reports_failure(monkeypatch):
    from remote_ui.config import ClientConfig
    from remote_ui.transport.memory import MemoryTransport

    class ScriptedTransport(MemoryTransport):
        def __init__(self, url):
            super().__init__()
            self.url = url
            self.error = None

        def run(self):
            self.open()
            self.deliver({"type": "acknowledge", "version": "0.1"})

    monkeypatch.setattr("remote_ui.transport.websocket.WebSocketTransport", ScriptedTransport)
    assert launcher.launch_client(ClientConfig.from_env({})) == 1


def test_launch_client_clean_close(monkeypatch):
    from remote_ui.config import ClientConfig
    from remote_ui.transport.memory import MemoryTransport

    class ScriptedTransport(MemoryTransport):
        def __init__(self, url):
            super().__init__()
            self.error = None

        def run(self):
            self.open()
            self.deliver({"type": "acknowledge", "version": "1.0"})
            self.disconnect()

    monkeypatch.setattr("remote_ui.transport.websocket.WebSocketTransport", ScriptedTransport)
    assert launcher.launch_client(ClientConfig.from_env({})) == 0
