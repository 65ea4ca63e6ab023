import importlib
import logging

import pytest

import surfom
from surfom import exceptions as exc
from surfom.base import ParamTemplate, StatesTemplate, RatesTemplate, VariableKiosk
from surfom.settings import Settings
from surfom.util import cumulative_index, divide, limit, merge_dict, version_tuple


class Parameters(ParamTemplate):
    __slots__ = ["A", "B", "C"]
    A: float
    B: list
    C: float


class States(StatesTemplate):
    __slots__ = ["WT"]
    WT: float


class Rates(RatesTemplate):
    __slots__ = ["RWT"]
    RWT: float


def test_parameters_are_converted():
    params = Parameters({"A": 1, "B": (1, 2), "C": None})
    assert params.A == 1.0
    assert params.B == [1, 2]
    assert params.C is None


def test_missing_parameter():
    with pytest.raises(exc.ParameterError):
        Parameters({"A": 1.0, "B": []})


def test_invalid_parameter():
    with pytest.raises(exc.ParameterError):
        Parameters({"A": "many", "B": [], "C": 1.0})


def test_states_are_published_and_locked():
    kiosk = VariableKiosk()
    states = States(kiosk, WT=10.0, publish="WT")
    assert kiosk["WT"] == 10.0
    assert kiosk.WT == 10.0
    with pytest.raises(exc.SurfomError):
        states.WT = 12.0
    states.unlock()
    states.WT = 12.0
    assert kiosk["WT"] == 12.0


def test_missing_initial_state():
    with pytest.raises(exc.SurfomError):
        States(VariableKiosk())


def test_rates_zerofy():
    kiosk = VariableKiosk()
    rates = Rates(kiosk, publish=["RWT"])
    rates.unlock()
    rates.RWT = 3.0
    rates.lock()
    rates.zerofy()
    assert kiosk["RWT"] == 0.0


def test_duplicate_variable():
    kiosk = VariableKiosk()
    States(kiosk, WT=1.0)
    with pytest.raises(exc.SurfomError):
        States(kiosk, WT=1.0)


def test_kiosk_cannot_be_set_directly():
    with pytest.raises(RuntimeError):
        VariableKiosk()["WT"] = 1.0


def test_limit_and_divide():
    assert limit(0.0, 1.0, 1.5) == 1.0
    assert limit(0.0, 1.0, -0.5) == 0.0
    assert divide(1.0, 0.0) == 0.0
    assert divide(1.0, 4.0) == 0.25


def test_cumulative_index():
    assert cumulative_index(150.0, [100.0, 200.0, 300.0]) == 1
    assert cumulative_index(100.0, [100.0, 200.0, 300.0]) == 0
    assert cumulative_index(5000.0, [100.0, 200.0, 300.0]) == 2
    assert cumulative_index(50.0, [100.0]) == 0


def test_merge_dict():
    assert merge_dict({"a": 1}, {"a": 2}, overwrite=True) == {"a": 2}
    with pytest.raises(RuntimeError):
        merge_dict({"a": 1}, {"a": 2})


def test_version_tuple():
    assert version_tuple("1.0.0") < version_tuple("1.10.0")


def test_user_settings_override_defaults(tmp_path, caplog):
    fname = tmp_path / "user_settings.py"
    fname.write_text('LOG_LEVEL_CONSOLE = "DEBUG"\nlowercase = 1\n')
    settings = Settings(user_settings_file=str(fname))
    assert settings.LOG_LEVEL_CONSOLE == "DEBUG"
    assert settings.LOG_LEVEL_FILE == "INFO"
    assert not hasattr(settings, "lowercase")
    assert "not ALL-CAPS" in caplog.text


def test_default_settings_without_user_file(tmp_path):
    settings = Settings(user_settings_file=str(tmp_path / "absent.py"))
    assert settings.LOG_LEVEL_CONSOLE == "ERROR"
    assert "handlers" in settings.LOG_CONFIG


def test_user_log_settings_reach_log_config(tmp_path):
    log_dir = tmp_path / "mylogs"
    fname = tmp_path / "user_settings.py"
    fname.write_text('LOG_DIR = %r\nLOG_LEVEL_FILE = "WARNING"\nLOG_LEVEL_CONSOLE = "DEBUG"\n' % str(log_dir))
    settings = Settings(user_settings_file=str(fname))
    handlers = settings.LOG_CONFIG["handlers"]
    assert handlers["console"]["level"] == "DEBUG"
    assert handlers["file"]["level"] == "WARNING"
    assert handlers["file"]["filename"] == str(log_dir / "surfom.log")


def test_user_log_config_is_kept(tmp_path):
    fname = tmp_path / "user_settings.py"
    fname.write_text('LOG_LEVEL_CONSOLE = "DEBUG"\nLOG_CONFIG = {"version": 1}\n')
    settings = Settings(user_settings_file=str(fname))
    assert settings.LOG_CONFIG == {"version": 1}


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    disabled = {
        name: logger.disabled
        for name, logger in logging.root.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, value in disabled.items():
        logging.getLogger(name).disabled = value


def test_initialize_configures_logging_from_user_settings(tmp_path, monkeypatch, restore_logging):
    log_dir = tmp_path / "mylogs"
    fname = tmp_path / "user_settings.py"
    fname.write_text('LOG_DIR = %r\nLOG_LEVEL_CONSOLE = "DEBUG"\n' % str(log_dir))
    user_settings = Settings(user_settings_file=str(fname))
    monkeypatch.setattr(importlib.import_module("surfom.settings"), "settings", user_settings)
    monkeypatch.setattr(surfom, "settings", None)
    monkeypatch.setattr(surfom, "__initialized", False)

    surfom.initialize()

    assert surfom.settings is user_settings
    assert log_dir.is_dir()
    handlers = {type(h).__name__: h for h in logging.getLogger().handlers}
    assert handlers["StreamHandler"].level == logging.DEBUG
    assert handlers["RotatingFileHandler"].level == logging.INFO
    assert handlers["RotatingFileHandler"].baseFilename == str(log_dir / "surfom.log")
