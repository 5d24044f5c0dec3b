"""test suite for shell detection and launcher generation."""
import json
import pytest
import shutil
import stat
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cc_profiles.config import ProfilePaths
from cc_profiles.domain.errors import ErrorKind, FilesystemError
from cc_profiles.shell import (
    INTEGRATION_MARKER,
    LauncherGenerator,
    LauncherStyle,
    ShellFamily,
    detect_target,
)


@pytest.fixture
def home():
    home = Path(tempfile.mkdtemp())
    yield home
    shutil.rmtree(home, ignore_errors=True)


@pytest.fixture
def paths(home):
    return ProfilePaths.from_home(home)


class TestDetectTarget:
    def test_zsh(self, paths):
        target = detect_target(paths, shell="/usr/bin/zsh")
        assert target.family is ShellFamily.ZSH
        assert target.rc_file == paths.home / ".zshrc"
        assert target.artifact_path == paths.home / ".cc-profiles-aliases.sh"
        assert target.style is LauncherStyle.SCRIPT

    def test_bash_prefers_bash_profile(self, paths):
        assert detect_target(paths, shell="/bin/bash").rc_file == paths.home / ".bashrc"

        (paths.home / ".bash_profile").write_text("")

        target = detect_target(paths, shell="/bin/bash")
        assert target.family is ShellFamily.BASH
        assert target.rc_file == paths.home / ".bash_profile"

    def test_fish(self, paths):
        target = detect_target(paths, shell="/opt/homebrew/bin/fish")
        assert target.family is ShellFamily.FISH
        assert target.style is LauncherStyle.AUTOLOAD
        assert target.artifact_path == paths.home / ".config" / "fish" / "functions" / "cc-profiles.fish"

    def test_unknown_defaults_to_bashrc(self, paths):
        target = detect_target(paths, shell="")
        assert target.family is ShellFamily.UNKNOWN
        assert target.rc_file == paths.home / ".bashrc"
        assert target.style is LauncherStyle.SCRIPT

    def test_reads_shell_env(self, paths, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert detect_target(paths).family is ShellFamily.ZSH


class TestScriptLauncher:
    @pytest.fixture
    def launcher(self, paths):
        return LauncherGenerator(paths, detect_target(paths, shell="/bin/zsh"))

    def test_function_block(self, launcher):
        assert launcher.renderer.function("work") == (
            "work() {\n"
            '    CLAUDE_CONFIG_DIR="$HOME/.claude-work" command claude "$@"\n'
            "}"
        )

    def test_regenerate(self, launcher, paths):
        launcher.regenerate(["work", "personal"])

        content = paths.aliases_file.read_text()
        assert content.startswith("#!/bin/bash\n# Auto-generated by cc-profiles - DO NOT EDIT MANUALLY\n")
        assert "# Generated: " in content
        assert content.count("command claude") == 2
        assert content.index("work() {") < content.index("personal() {")
        assert content.count("cc-list() {") == 1
        assert 'echo "  work"' in content
        assert 'echo "  personal"' in content
        assert stat.S_IMODE(paths.aliases_file.stat().st_mode) == 0o644

    def test_regenerate_replaces_content(self, launcher, paths):
        launcher.regenerate(["work", "personal"])
        launcher.regenerate(["work"])

        content = paths.aliases_file.read_text()
        assert "personal" not in content
        assert content.count("command claude") == 1

    def test_regenerate_empty_deletes_file(self, launcher, paths):
        launcher.regenerate(["work"])
        launcher.regenerate([])
        assert not paths.aliases_file.exists()

        # nothing to delete is fine too
        launcher.regenerate([])

    def test_render_only_differs_by_timestamp(self, launcher):
        first = launcher.render(["work", "personal"], generated_at="2025-01-01T00:00:00+00:00")
        second = launcher.render(["work", "personal"], generated_at="2025-02-01T00:00:00+00:00")

        strip = lambda text: [line for line in text.splitlines() if not line.startswith("# Generated:")]
        assert strip(first) == strip(second)
        assert first != second

    def test_sync_from_store(self, launcher, paths):
        paths.profiles_config.write_text(json.dumps({
            "profiles": {
                "work": {"name": "work", "createdAt": "2025-01-01T00:00:00Z", "shellAlias": "work"},
                "personal": {"name": "personal", "createdAt": "2025-01-02T00:00:00Z", "shellAlias": "personal"},
            },
            "version": "1.0.0",
        }))

        assert launcher.sync_from_store() == ["work", "personal"]
        assert "personal() {" in paths.aliases_file.read_text()

    def test_sync_from_empty_store(self, launcher, paths):
        paths.aliases_file.write_text("stale")
        assert launcher.sync_from_store() == []
        assert not paths.aliases_file.exists()

    def test_sync_skips_names_that_are_not_profile_names(self, launcher, paths):
        paths.profiles_config.write_text(json.dumps({
            "profiles": {
                "work": {"name": "work", "createdAt": "2025-01-01T00:00:00Z", "shellAlias": "work"},
                "x; touch /tmp/pwned; y": {"name": "x", "createdAt": "2025-01-02T00:00:00Z", "shellAlias": "x"},
            },
            "version": "1.0.0",
        }))

        assert launcher.sync_from_store() == ["work"]

        content = paths.aliases_file.read_text()
        assert "touch" not in content
        assert "work() {" in content

    def test_regenerate_skips_invalid_names(self, launcher, paths):
        launcher.regenerate(["work", "$(id)", "Bad Name"])

        content = paths.aliases_file.read_text()
        assert content.count("command claude") == 1
        assert "$(id)" not in content

    def test_regenerate_over_directory_raises_filesystem_error(self, launcher, paths):
        paths.aliases_file.mkdir()

        with pytest.raises(FilesystemError) as exc_info:
            launcher.regenerate(["work"])

        assert exc_info.value.kind is ErrorKind.IO
        assert exc_info.value.path == paths.aliases_file
        assert isinstance(exc_info.value.cause, OSError)

    def test_delete_over_directory_raises_filesystem_error(self, launcher, paths):
        paths.aliases_file.mkdir()

        with pytest.raises(FilesystemError):
            launcher.regenerate([])

    def test_setup_integration(self, launcher, paths):
        rc_file = paths.home / ".zshrc"
        rc_file.write_text("export EDITOR=vim\n\n\n")
        assert not launcher.is_integrated()

        assert launcher.setup_integration() == rc_file

        assert rc_file.read_text() == (
            "export EDITOR=vim\n\n"
            f"{INTEGRATION_MARKER}\n"
            "[ -f ~/.cc-profiles-aliases.sh ] && source ~/.cc-profiles-aliases.sh\n"
        )
        assert launcher.is_integrated()

    def test_setup_integration_is_idempotent(self, launcher, paths):
        launcher.setup_integration()
        launcher.setup_integration()

        assert (paths.home / ".zshrc").read_text().count(INTEGRATION_MARKER) == 1

    def test_teardown_integration(self, launcher, paths):
        rc_file = paths.home / ".zshrc"
        rc_file.write_text("export EDITOR=vim\n")
        launcher.setup_integration()
        launcher.regenerate(["work"])

        launcher.teardown_integration()

        content = rc_file.read_text()
        assert INTEGRATION_MARKER not in content
        assert ".cc-profiles-aliases.sh" not in content
        assert "export EDITOR=vim" in content
        assert not paths.aliases_file.exists()
        assert not launcher.is_integrated()

    def test_setup_integration_with_unreadable_rc_file(self, launcher, paths):
        (paths.home / ".zshrc").mkdir()

        with pytest.raises(FilesystemError) as exc_info:
            launcher.setup_integration()

        assert exc_info.value.kind is ErrorKind.IO


class TestAutoloadLauncher:
    @pytest.fixture
    def launcher(self, paths):
        return LauncherGenerator(paths, detect_target(paths, shell="/usr/bin/fish"))

    def test_regenerate_creates_functions_dir(self, launcher, paths):
        launcher.regenerate(["work", "personal"])

        content = paths.fish_functions_file.read_text()
        assert content.startswith("# Auto-generated by cc-profiles - DO NOT EDIT MANUALLY\n")
        assert "function work\n" in content
        assert 'set -x CLAUDE_CONFIG_DIR "$HOME/.claude-work"' in content
        assert content.count("command claude $argv") == 2
        assert content.count("function cc-list") == 1
        assert not paths.aliases_file.exists()

    def test_always_integrated(self, launcher, paths):
        assert launcher.is_integrated()
        launcher.setup_integration()
        assert not (paths.home / ".config" / "fish" / "config.fish").exists()

    def test_teardown_keeps_config_fish(self, launcher, paths):
        config_fish = paths.home / ".config" / "fish" / "config.fish"
        config_fish.parent.mkdir(parents=True)
        config_fish.write_text("# cc-profiles shell integration\n")
        launcher.regenerate(["work"])

        launcher.teardown_integration()

        assert config_fish.read_text() == "# cc-profiles shell integration\n"
        assert not paths.fish_functions_file.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
