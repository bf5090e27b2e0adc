import pytest

from niribar import config_loader
from niribar.config_loader import ConfigLoader
from niribar.models import NiribarError


@pytest.fixture
def default_config_file(tmp_path, monkeypatch):
    path = tmp_path / "niribar" / "config.toml"
    monkeypatch.setattr(config_loader, "CONFIG_FILE", path)
    return path


@pytest.mark.asyncio
async def test_missing_default_file_uses_defaults(default_config_file, test_logger):
    conf = await ConfigLoader(test_logger).load()
    assert dict(conf) == {}
    assert conf.get_int("connect_retries") == 10


@pytest.mark.asyncio
async def test_default_file(default_config_file, test_logger):
    default_config_file.parent.mkdir()
    default_config_file.write_text('[niribar]\npretty = true\nsocket = "/tmp/niri.sock"\n')
    conf = await ConfigLoader(test_logger).load()
    assert conf.get_bool("pretty") is True
    assert conf.get_str("socket") == "/tmp/niri.sock"


@pytest.mark.asyncio
async def test_explicit_file(tmp_path, monkeypatch, test_logger):
    path = tmp_path / "bar.toml"
    path.write_text("[niribar]\ndeduplicate = true\n")
    monkeypatch.setenv("NIRIBAR_TEST_DIR", str(tmp_path))
    conf = await ConfigLoader(test_logger).load("$NIRIBAR_TEST_DIR/bar.toml")
    assert conf.get_bool("deduplicate") is True


@pytest.mark.asyncio
async def test_explicit_file_missing(tmp_path, test_logger):
    with pytest.raises(NiribarError, match="not found"):
        await ConfigLoader(test_logger).load(str(tmp_path / "nope.toml"))


@pytest.mark.asyncio
async def test_syntax_error(tmp_path, test_logger):
    path = tmp_path / "bad.toml"
    path.write_text("[niribar\npretty = true\n")
    with pytest.raises(NiribarError, match="Problem reading"):
        await ConfigLoader(test_logger).load(str(path))


@pytest.mark.asyncio
async def test_section_must_be_a_table(tmp_path, test_logger):
    path = tmp_path / "bad.toml"
    path.write_text('niribar = "yes"\n')
    with pytest.raises(NiribarError):
        await ConfigLoader(test_logger).load(str(path))


@pytest.mark.asyncio
async def test_validation_errors_are_kept(tmp_path, test_logger):
    path = tmp_path / "conf.toml"
    path.write_text('[niribar]\nconnect_retries = "many"\nstrict_projection = "maybe"\n')
    loader = ConfigLoader(test_logger)
    conf = await loader.load(str(path))
    assert len(loader.errors) == 2
    assert conf.get_int("connect_retries", default=10) == 10
