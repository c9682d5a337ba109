import pytest
from fastapi.testclient import TestClient

from conftest import FakeScanner, run
from x32_portnamer import main as cli
from x32_portnamer.discovery import MixerInfo
from x32_portnamer.errors import DiscoveryError, HostRenameError, QueryTimeout

PORTS = ["Local 1", None, "Main L (PRE)"]


def factory_for(scanner):
    async def factory():
        return scanner
    return factory


def test_scan_runs_in_order():
    scanner = FakeScanner(PORTS)
    assert run(cli.scan(factory_for(scanner))) == PORTS
    assert scanner.calls == ["ensure_sample_rate", "scan_card_routing", "terminate"]


def test_scan_terminates_on_error():
    scanner = FakeScanner(PORTS, error=QueryTimeout("/-prefs/clockrate", 2.0))
    with pytest.raises(QueryTimeout):
        run(cli.scan(factory_for(scanner)))
    assert scanner.calls == ["ensure_sample_rate", "terminate"]


def test_get_routing():
    client = TestClient(cli.create_app(factory_for(FakeScanner(PORTS))))
    response = client.get("/routing")
    assert response.status_code == 200
    assert response.json() == {"status": "success", "ports": PORTS}


def test_get_routing_mixer_error():
    scanner = FakeScanner(PORTS, error=QueryTimeout("/-prefs/clockrate", 2.0))
    client = TestClient(cli.create_app(factory_for(scanner)))
    response = client.get("/routing")
    assert response.status_code == 502
    assert response.json()["status"] == "error"


def test_post_jack(monkeypatch):
    applied = []

    def apply_aliases(names):
        applied.append(names)
        return len(names)

    monkeypatch.setattr(cli.jack, "apply_aliases", apply_aliases)
    client = TestClient(cli.create_app(factory_for(FakeScanner(PORTS))))
    response = client.post("/routing/jack")
    assert response.status_code == 200
    assert response.json()["renamed"] == 3
    assert applied == [PORTS]


def test_post_jack_rename_error(monkeypatch):
    def apply_aliases(names):
        raise HostRenameError("jack_lsp failed")

    monkeypatch.setattr(cli.jack, "apply_aliases", apply_aliases)
    client = TestClient(cli.create_app(factory_for(FakeScanner(PORTS))))
    assert client.post("/routing/jack").status_code == 500


def test_factory_uses_given_mixer(monkeypatch):
    opened = []

    async def open_scanner(family, address, sample_rate):
        opened.append((family, address, sample_rate))
        return FakeScanner(PORTS)

    monkeypatch.setattr(cli, "open_scanner", open_scanner)
    factory = cli.make_scanner_factory(mixer="10.0.0.9", family="xair", sample_rate=48000)
    run(factory())
    assert opened == [("xair", "10.0.0.9", 48000)]


def test_factory_discovers_mixer(monkeypatch):
    opened = []

    async def open_scanner(family, address, sample_rate):
        opened.append((family, address))
        return FakeScanner(PORTS)

    monkeypatch.setattr(cli, "open_scanner", open_scanner)
    monkeypatch.setattr(cli, "find_mixer",
                        lambda timeout, attempts: MixerInfo("10.0.0.3", "FOH", "X32", "4.06", "x32"))
    run(cli.make_scanner_factory()())
    assert opened == [("x32", "10.0.0.3")]


def test_cli_reaper(monkeypatch, tmp_path):
    written = []

    async def open_scanner(family, address, sample_rate):
        return FakeScanner(PORTS)

    monkeypatch.setattr(cli, "open_scanner", open_scanner)
    monkeypatch.setattr(cli.reaper, "set_port_aliases", lambda path, names: written.append((path, names)))
    config = str(tmp_path / "reaper.ini")

    assert cli.main(["--mixer", "10.0.0.9", "reaper", config]) == 0
    assert written == [(config, PORTS)]


def test_cli_reports_mixer_errors(monkeypatch):
    async def open_scanner(family, address, sample_rate):
        raise DiscoveryError("nobody home")

    monkeypatch.setattr(cli, "open_scanner", open_scanner)
    assert cli.main(["--mixer", "10.0.0.9", "jack"]) == 1


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])
