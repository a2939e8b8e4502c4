import json

from core.config import Config
from utils.platform_utils import default_case_sensitive, default_thread_count


def test_defaults_without_file(tmp_path):
    config = Config(tmp_path / "cfg.json")
    assert config.get("threads") is None
    assert config.get("follow_symlinks") is True
    assert config.get("queue_capacity") == 1024
    assert config.get("missing", "fallback") == "fallback"


def test_save_and_reload(tmp_path):
    path = tmp_path / "cfg.json"
    config = Config(path)
    config.set("threads", 3)
    config.set("language", "de")
    config.save_config()

    reloaded = Config(path)
    assert reloaded.get("threads") == 3
    assert reloaded.get("language") == "de"
    assert reloaded.get("show_progress") is True


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    assert Config(path).config == Config(tmp_path / "absent.json").config


def test_non_object_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert Config(path).get("queue_capacity") == 1024


def test_run_config_uses_host_defaults(tmp_path):
    run = Config(tmp_path / "cfg.json").build_run_config()
    assert run.threads == default_thread_count()
    assert run.case_sensitive is default_case_sensitive()
    assert run.follow_symlinks is True
    assert run.verbose is False


def test_run_config_prefers_stored_then_explicit_values(tmp_path):
    config = Config(tmp_path / "cfg.json")
    config.set("threads", 2)
    config.set("case_sensitive", False)
    config.set("follow_symlinks", False)
    assert config.build_run_config().threads == 2
    assert config.build_run_config().case_sensitive is False
    assert config.build_run_config().follow_symlinks is False

    run = config.build_run_config(threads=6, case_sensitive=True, follow_symlinks=True)
    assert (run.threads, run.case_sensitive, run.follow_symlinks) == (6, True, True)


def test_debug_implies_verbose(tmp_path):
    run = Config(tmp_path / "cfg.json").build_run_config(debug=True)
    assert run.debug and run.verbose


def test_malformed_counts_fall_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"threads": "many", "queue_capacity": [1]}), encoding="utf-8")
    run = Config(path).build_run_config()
    assert run.threads == default_thread_count()
    assert run.queue_capacity == 1024


def test_non_positive_counts_fall_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"threads": 0, "queue_capacity": -5}), encoding="utf-8")
    run = Config(path).build_run_config()
    assert run.threads == default_thread_count()
    assert run.queue_capacity == 1024
