import pytest

from core.config import BEHIND_RATIO, ON_TRACK_RATIO, STORAGE_VERSION, SimulatorConfig, load_config


def test_defaults_without_config_file():
    cfg = load_config("does-not-exist.yaml")
    assert cfg == SimulatorConfig()
    assert cfg.deal_sizes == (1_500, 2_500, 5_000, 10_000)
    assert cfg.scenario_names == ("Scenario A", "Scenario B", "Scenario C")
    assert cfg.avg_deal_size == 5_000
    assert cfg.on_track_ratio == ON_TRACK_RATIO == 0.95
    assert cfg.behind_ratio == BEHIND_RATIO == 0.70
    assert cfg.storage_version == STORAGE_VERSION


def test_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "deals:\n"
        "  recurring_sizes: [1000, 2000]\n"
        "  one_off_sizes: [250]\n"
        "  avg_size: 2500\n"
        "scenarios:\n"
        "  names: [Plan X, Plan Y]\n"
        "goal:\n"
        "  on_track_ratio: 0.9\n"
        "  behind_ratio: 0.6\n"
        "storage:\n"
        "  path: custom/store.json\n"
        "app:\n"
        "  log_level: debug\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))
    assert cfg.deal_sizes == (1_000, 2_000)
    assert cfg.one_off_sizes == (250,)
    assert cfg.avg_deal_size == 2_500
    assert cfg.scenario_names == ("Plan X", "Plan Y")
    assert cfg.on_track_ratio == 0.9
    assert cfg.behind_ratio == 0.6
    assert cfg.storage_path == "custom/store.json"
    assert cfg.log_level == "DEBUG"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("deals:\n  avg_size: 2500\nstorage:\n  path: from/yaml.json\n", encoding="utf-8")
    monkeypatch.setenv("SIMULATOR_AVG_DEAL_SIZE", "7500")
    monkeypatch.setenv("SIMULATOR_STORAGE_PATH", "from/env.json")
    monkeypatch.setenv("SIMULATOR_LOG_LEVEL", "warning")
    cfg = load_config(str(path))
    assert cfg.avg_deal_size == 7_500
    assert cfg.storage_path == "from/env.json"
    assert cfg.log_level == "WARNING"


def test_blank_env_var_is_ignored(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("deals:\n  avg_size: 2500\n", encoding="utf-8")
    monkeypatch.setenv("SIMULATOR_AVG_DEAL_SIZE", "  ")
    assert load_config(str(path)).avg_deal_size == 2_500


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == SimulatorConfig()


@pytest.mark.parametrize(
    "body",
    [
        "goal:\n  on_track_ratio: 0.5\n  behind_ratio: 0.8\n",
        "goal:\n  behind_ratio: 0\n",
        "deals:\n  avg_size: 0\n",
    ],
)
def test_invalid_settings_raise(tmp_path, body):
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        SimulatorConfig().avg_deal_size = 1
