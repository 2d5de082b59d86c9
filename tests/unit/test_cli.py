"""
CLI tests.

Runs sellsy_cli.main.main() in-process with a stub executor behind the
client so no request leaves the machine.
"""

import json

import pytest

from sellsy_cli import main as cli_main
from sellsy_cli.commands import api
from sellsy_cli.config import CLIConfig, get_default_config_template, load_config

from fixtures import StubExecutor


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home so no config file is found."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def stub_client(monkeypatch, make_client):
    """Route CLI calls through a StubExecutor; returns a setter for its answer."""
    def _use(executor):
        monkeypatch.setattr(api, "create_client", lambda config: make_client(executor))
        return executor

    return _use


class TestCallCommand:
    """Tests for `sellsy call`."""

    def test_success_json(self, workdir, stub_client, capsys):
        executor = stub_client(StubExecutor.returning({"status": "success", "response": {"id": 7}}))

        exit_code = cli_main.main(["call", "Document.getOne", "--params", '{"id": 7}', "--json"])

        out = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert out == {"method": "Document.getOne", "ok": True, "status": "success", "response": {"id": 7}}
        assert json.loads(executor.last_call["data"]["do_in"]) == {
            "method": "Document.getOne",
            "params": {"id": 7},
        }

    def test_api_error_exit_code(self, workdir, stub_client, capsys):
        stub_client(StubExecutor.returning({"status": "error", "error": {"code": "E_X", "message": "nope"}}))

        exit_code = cli_main.main(["call", "Document.getOne", "--json"])

        out = json.loads(capsys.readouterr().out)
        assert exit_code == 2
        assert out["ok"] is False
        assert out["error"] == {"code": "E_X", "message": "nope"}

    def test_request_failure_exit_code(self, workdir, stub_client, capsys):
        stub_client(StubExecutor.failing("Connection refused"))

        exit_code = cli_main.main(["call", "Infos.getInfos", "--json"])

        out = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert out["error"]["code"] == "TRANSPORT_ERROR"

    def test_debug_includes_request(self, workdir, stub_client, capsys):
        stub_client(StubExecutor.returning({"status": "success"}))

        cli_main.main(["call", "Staffs.getList", "--json", "--debug"])

        out = json.loads(capsys.readouterr().out)
        assert out["request"]["io_mode"] == "json"

    def test_human_output(self, workdir, stub_client, capsys):
        stub_client(StubExecutor.returning({"status": "success", "response": {"id": 7}}))

        exit_code = cli_main.main(["call", "Document.getOne"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "method: Document.getOne" in out
        assert "ok: true" in out

    def test_invalid_params(self, workdir, stub_client, capsys):
        executor = stub_client(StubExecutor.returning({"status": "success"}))

        exit_code = cli_main.main(["call", "Document.getOne", "--params", "[1, 2]"])

        assert exit_code == 1
        assert "Invalid --params" in capsys.readouterr().err
        assert executor.calls == []


class TestInfosCommand:
    """Tests for `sellsy infos`."""

    def test_infos(self, workdir, stub_client, capsys):
        executor = stub_client(StubExecutor.returning({"status": "success", "response": {"corp": "ACME"}}))

        exit_code = cli_main.main(["infos", "--json"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["response"] == {"corp": "ACME"}
        assert json.loads(executor.last_call["data"]["do_in"])["method"] == "Infos.getInfos"


class TestModulesCommand:
    """Tests for `sellsy modules`."""

    def test_json_lists_all_modules(self, workdir, capsys):
        exit_code = cli_main.main(["modules", "--json"])

        modules = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert len(modules) == 21
        assert {"module": "SmartTags", "accessor": "smart_tags"} in modules

    def test_human(self, workdir, capsys):
        cli_main.main(["modules"])

        assert "client.time_tracking()" in capsys.readouterr().out


class TestConfigCommand:
    """Tests for `sellsy config`."""

    def test_init_writes_template(self, workdir, capsys):
        exit_code = cli_main.main(["config", "--init"])

        assert exit_code == 0
        assert (workdir / "sellsy.yaml").read_text() == get_default_config_template()

    def test_init_refuses_to_overwrite(self, workdir, capsys):
        (workdir / "sellsy.yaml").write_text("consumer_key: mine\n")

        exit_code = cli_main.main(["config", "--init"])

        assert exit_code == 1
        assert (workdir / "sellsy.yaml").read_text() == "consumer_key: mine\n"

    def test_show_masks_secrets(self, workdir, monkeypatch, capsys):
        monkeypatch.setenv("SELLSY_CONSUMER_SECRET", "top-secret")

        exit_code = cli_main.main(["config", "--show"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "top-secret" not in out
        assert json.loads(out)["consumer_secret"] == "********"

    def test_no_command_prints_help(self, workdir, capsys):
        assert cli_main.main([]) == 1


class TestLoadConfig:
    """Tests for CLI config loading."""

    def test_template_is_loadable(self, workdir):
        (workdir / "sellsy.yaml").write_text(get_default_config_template())

        config = load_config()

        assert isinstance(config, CLIConfig)
        assert config.client.api_url == "https://apifeed.sellsy.com/0/"
        assert config.default_output_format == "human"

    def test_explicit_path_and_env(self, workdir, monkeypatch):
        path = workdir / "custom.yaml"
        path.write_text("consumer_key: file-ck\nlog_level: DEBUG\n")
        monkeypatch.setenv("SELLSY_CONSUMER_KEY", "env-ck")
        monkeypatch.setenv("SELLSY_LOG_LEVEL", "WARNING")

        config = load_config(path)

        assert config.client.consumer_key == "env-ck"
        assert config.log_level == "WARNING"

    def test_json_default_output_format(self, workdir, stub_client, capsys):
        (workdir / "sellsy.yaml").write_text("default_output_format: json\n")
        stub_client(StubExecutor.returning({"status": "success"}))

        cli_main.main(["infos"])

        assert json.loads(capsys.readouterr().out)["ok"] is True
