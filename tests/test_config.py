"""Tests for environment-driven configuration."""
import pytest

from actiondeps.config import Config, get_config, reset_config

ENV_VARS = ('ACTION_DEPS_ENTRY_POINT_PATTERNS', 'ACTION_DEPS_LOG_LEVEL', 'ACTION_DEPS_EXCLUDED_DIRS')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Unset every ACTION_DEPS_* variable and restore it after the test.

    Setting before deleting makes monkeypatch remember the original state, so
    values written by load_dotenv are removed at teardown as well.
    """
    for name in ENV_VARS:
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


class TestDefaults:

    def test_entry_point_patterns(self):
        assert Config().entry_point_patterns == ['pages/**/*.{tsx,jsx,ts,js}']

    def test_log_level(self):
        assert Config().log_level == 'WARNING'

    def test_excluded_dirs(self):
        assert Config().excluded_dirs == ['node_modules', 'dist']


class TestEnvironment:

    def test_patterns_split_outside_braces(self, monkeypatch):
        monkeypatch.setenv('ACTION_DEPS_ENTRY_POINT_PATTERNS', 'pages/*.{tsx,ts}, routes/**/*.tsx')
        assert Config().entry_point_patterns == ['pages/*.{tsx,ts}', 'routes/**/*.tsx']

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv('ACTION_DEPS_LOG_LEVEL', 'debug')
        assert Config().log_level == 'DEBUG'

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv('ACTION_DEPS_LOG_LEVEL', 'LOUD')
        with pytest.raises(ValueError, match='ACTION_DEPS_LOG_LEVEL'):
            Config()

    def test_excluded_dirs(self, monkeypatch):
        monkeypatch.setenv('ACTION_DEPS_EXCLUDED_DIRS', 'node_modules, build ,,generated')
        assert Config().excluded_dirs == ['node_modules', 'build', 'generated']

    def test_dotenv_file(self, tmp_path):
        env_file = tmp_path / 'custom.env'
        env_file.write_text('ACTION_DEPS_EXCLUDED_DIRS=vendor\n', encoding='utf-8')
        assert Config(env_file).excluded_dirs == ['vendor']

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch):
        (tmp_path / '.env').write_text('ACTION_DEPS_LOG_LEVEL=ERROR\n', encoding='utf-8')
        monkeypatch.setenv('ACTION_DEPS_LOG_LEVEL', 'INFO')
        assert Config().log_level == 'INFO'


class TestSingleton:

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config(self):
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestSharedDefaults:

    def test_defaults_come_from_the_analyzer(self):
        from actiondeps.analyzer.entry_points import DEFAULT_ENTRY_POINT_PATTERNS
        from actiondeps.analyzer.file_finder import DEFAULT_EXCLUDED_DIRS

        config = Config()
        assert config.entry_point_patterns == list(DEFAULT_ENTRY_POINT_PATTERNS)
        assert config.excluded_dirs == list(DEFAULT_EXCLUDED_DIRS)

    def test_empty_exclusions_disable_defaults(self, monkeypatch):
        monkeypatch.setenv('ACTION_DEPS_EXCLUDED_DIRS', '')
        assert Config().excluded_dirs == []
