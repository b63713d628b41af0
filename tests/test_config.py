import json

import pytest

from config import DEFAULTS, load_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.json"))
    assert config == DEFAULTS


def test_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"DB_FILE": "other.db", "LOW_STOCK_THRESHOLD": "5"}), encoding="utf-8")
    config = load_config(str(path))
    assert config["DB_FILE"] == "other.db"
    assert config["LOW_STOCK_THRESHOLD"] == 5
    assert config["CURRENCY_SYMBOL"] == "$"


def test_invalid_json_names_the_line(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{\n  "DB_FILE": "x.db",\n  oops\n}', encoding="utf-8")
    with pytest.raises(ValueError) as exc:
        load_config(str(path))
    assert "oops" in str(exc.value)


def test_non_object_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
