from scripts import sync_velog
from blogfeed.settings import Settings
from tests.conftest import FakeVelogClient, make_velog_post


def test_main_reports_tally(tmp_path, capsys):
    client = FakeVelogClient(
        posts=[make_velog_post("one"), make_velog_post("two")],
        details={"one": {**make_velog_post("one"), "body": "1"}},
    )
    settings_obj = Settings(
        VELOG_USERNAME="alice", CONTENT_DIR=str(tmp_path), SYNC_DELAY_SECONDS=0
    )

    exit_code = sync_velog.main(settings_obj, client=client)

    assert exit_code == 0
    assert "Success: 1, Failed: 1" in capsys.readouterr().out
    assert (tmp_path / "velog" / "one.mdx").exists()


def test_main_missing_username_exits_non_zero(tmp_path, capsys):
    client = FakeVelogClient(posts=[make_velog_post("one")])
    settings_obj = Settings(VELOG_USERNAME="", CONTENT_DIR=str(tmp_path))

    exit_code = sync_velog.main(settings_obj, client=client)

    assert exit_code == 1
    assert "VELOG_USERNAME is not set" in capsys.readouterr().err
    assert client.calls == []


def test_build_config_maps_settings(tmp_path):
    settings_obj = Settings(
        VELOG_USERNAME="alice",
        CONTENT_DIR=str(tmp_path),
        VELOG_SUBDIR="mirror",
        POST_EXTENSION=".md",
        SYNC_MAX_POSTS=10,
        SYNC_DELAY_SECONDS=1.5,
    )

    config = sync_velog.build_config(settings_obj)

    assert config.account_handle == "alice"
    assert config.velog_dir == tmp_path / "mirror"
    assert config.extension == ".md"
    assert config.max_posts == 10
    assert config.delay_seconds == 1.5
