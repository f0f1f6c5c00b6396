from unittest.mock import patch

import pytest

from expensync import __main__ as cli


def test_parse_serve_defaults():
    args = cli.parse_args(["serve"])
    assert args.command == "serve"
    assert args.port == 5000
    assert args.reload is False


def test_parse_requires_command():
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as run:
        assert cli.main(["serve", "--port", "8001", "--host", "127.0.0.1"]) == 0
    run.assert_called_once_with("expensync.api.main:app", host="127.0.0.1", port=8001, reload=False)


def test_migrate_upgrades_to_requested_revision():
    with patch("alembic.command.upgrade") as upgrade:
        assert cli.main(["migrate", "base"]) == 0
    cfg, revision = upgrade.call_args.args
    assert revision == "base"
    assert cfg.get_main_option("script_location").endswith("migrations")


def test_alembic_config_carries_url():
    cfg = cli.alembic_config("postgresql://u:p@h/db")
    assert cfg.get_main_option("sqlalchemy.url") == "postgresql://u:p@h/db"
