from dockremote.MANAGERS.environment_manager import EnvironmentManager


def test_merge_order(tmp_path, monkeypatch):
    monkeypatch.setenv("FROM_OS", "os")
    monkeypatch.setenv("SHARED", "os")
    (tmp_path / "base.env").write_text("SHARED=base\nBASE_ONLY='quoted value'\n# comment\n")
    (tmp_path / "override.env").write_text("SHARED=override\n")

    manager = EnvironmentManager(base_dir=str(tmp_path))
    env = manager.get_merged_environment({"EXPLICIT": "1"}, ["base.env", "override.env"])

    assert env["FROM_OS"] == "os"
    assert env["SHARED"] == "override"
    assert env["BASE_ONLY"] == "quoted value"
    assert env["EXPLICIT"] == "1"


def test_explicit_wins(tmp_path):
    (tmp_path / ".env").write_text("KEY=file\n")
    manager = EnvironmentManager(base_dir=str(tmp_path), include_os_environ=False)
    assert manager.get_merged_environment({"KEY": "explicit"}, [".env"]) == {"KEY": "explicit"}


def test_missing_file_is_skipped(tmp_path):
    manager = EnvironmentManager(base_dir=str(tmp_path), include_os_environ=False)
    assert manager.get_merged_environment(env_files=["missing.env"]) == {}


def test_key_without_value_is_ignored(tmp_path):
    (tmp_path / ".env").write_text("BARE\nSET=1\n")
    manager = EnvironmentManager(base_dir=str(tmp_path), include_os_environ=False)
    assert manager.get_merged_environment(env_files=[".env"]) == {"SET": "1"}
