import start_server


def test_port_comes_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9123")
    assert start_server._port_from_env() == 9123


def test_bad_or_missing_port_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT", "http")
    assert start_server._port_from_env() == start_server.DEFAULT_PORT

    monkeypatch.delenv("PORT")
    assert start_server._port_from_env() == 8000


def test_main_serves_the_application_with_one_worker(monkeypatch):
    calls = []
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setattr(start_server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    assert start_server.main() == 0

    from milkround.main import app

    assert calls[0][0] is app
    assert calls[0][1]["port"] == 9000
    assert calls[0][1]["host"] == "0.0.0.0"
    assert calls[0][1]["workers"] == 1
