"""Tests for registry building, resolution, launching, models and config."""

import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from noddy.config import Config, load_config, save_example_config
from noddy.errors import (
    AppNotFound,
    ElevationRequired,
    InvalidInput,
    NoWorkingDirectory,
    PathNotFound,
    SpawnFailed,
)
from noddy.launcher import launch
from noddy.models import AppRegistry, DiscoveredApp, Source
from noddy.registry import build_app_registry, dedupe_by_name, normalize_app_name
from noddy.resolver import find_best_match, resolve, sanitize_native_name


def app(name, path, display_name=None, source=Source.REGISTRY):
    return DiscoveredApp(name=name, display_name=display_name or name, path=path, source=source)


class TestNormalize(unittest.TestCase):
    """Test name normalization."""
    
    def test_examples(self):
        self.assertEqual(normalize_app_name("Visual Studio Code"), "visualstudiocode")
        self.assertEqual(normalize_app_name("µTorrent"), "torrent")
        self.assertEqual(normalize_app_name("Notepad++ (64-bit)"), "notepad64bit")
        self.assertEqual(normalize_app_name("!!!"), "")
    
    def test_idempotent(self):
        for value in ["Spotify", "  VLC media player ", "Ünïcödé Äpp 2", "a-b_c.d", ""]:
            once = normalize_app_name(value)
            self.assertEqual(normalize_app_name(once), once)


class TestRegistryBuilder(unittest.TestCase):
    """Test merging discovered apps into the registry."""
    
    def test_fallbacks_injected(self):
        registry = build_app_registry([])
        self.assertEqual(dict(registry.apps), {
            "notepad": "notepad.exe",
            "explorer": "explorer.exe",
            "cmd": "cmd.exe",
        })
        self.assertEqual(registry.display_names, ("cmd", "explorer", "notepad"))
    
    def test_discovered_app_shadows_fallback(self):
        registry = build_app_registry([app("notepad", r"C:\Windows\notepad.exe")])
        self.assertEqual(registry.apps["notepad"], r"C:\Windows\notepad.exe")
        self.assertEqual(registry.display_names.count("notepad"), 1)
    
    def test_raw_name_dedupe_keeps_first(self):
        apps = [app("code", "/first/code"), app("code", "/second/code")]
        self.assertEqual(len(dedupe_by_name(apps)), 1)
        registry = build_app_registry(apps, fallbacks={})
        self.assertEqual(registry.apps["code"], "/first/code")
    
    def test_normalized_collision_keeps_last(self):
        """Different raw names with the same normalized key: the later one wins."""
        apps = [
            app("vs-code", "/a/code.exe", "VS-Code"),
            app("vs code", "/b/code.exe", "VS Code"),
        ]
        registry = build_app_registry(apps, fallbacks={})
        self.assertEqual(dict(registry.apps), {"vscode": "/b/code.exe"})
        self.assertEqual(registry.display_names, ("VS Code", "VS-Code"))
    
    def test_display_names_sorted_and_unique(self):
        apps = [
            app("zoom", "/z", "Zoom"),
            app("slack", "/s", "Slack"),
            app("slack beta", "/sb", "Slack"),
            app("audacity", "/a", "Audacity"),
        ]
        registry = build_app_registry(apps, fallbacks={})
        self.assertEqual(registry.display_names, ("Audacity", "Slack", "Zoom"))
        reversed_registry = build_app_registry(list(reversed(apps)), fallbacks={})
        self.assertEqual(reversed_registry.display_names, registry.display_names)
    
    def test_rebuild_is_stable(self):
        apps = [app("code", "/c"), app("Code", "/C"), app("vlc", "/v")]
        first = build_app_registry(apps)
        second = build_app_registry(apps)
        self.assertEqual(dict(first.apps), dict(second.apps))
        self.assertEqual(first.display_names, second.display_names)
    
    def test_registry_is_read_only(self):
        registry = build_app_registry([])
        with self.assertRaises(TypeError):
            registry.apps["new"] = "/x"
        with self.assertRaises(AttributeError):
            registry.display_names = ()


class TestResolver(unittest.TestCase):
    """Test three-tier name matching."""
    
    def setUp(self):
        self.registry = AppRegistry(apps={
            "spotify": "/apps/spotify.exe",
            "spotifylauncher": "/apps/spotify-launcher.exe",
            "devstudio": "/apps/devstudio.exe",
            "visualstudiocode": "/apps/code.exe",
            "codeblocks": "/apps/codeblocks.exe",
        })
    
    def test_exact_match(self):
        for key, path in self.registry.apps.items():
            self.assertEqual(resolve(key, self.registry), path)
        self.assertEqual(resolve("Spotify!", self.registry), "/apps/spotify.exe")
    
    def test_prefix_prefers_longer_key(self):
        self.assertEqual(resolve("spot", self.registry), "/apps/spotify-launcher.exe")
    
    def test_prefix_beats_substring(self):
        # "code" is a prefix of codeblocks and a substring of visualstudiocode
        self.assertEqual(resolve("code", self.registry), "/apps/codeblocks.exe")
    
    def test_substring_match(self):
        self.assertEqual(resolve("studio code", self.registry), "/apps/code.exe")
    
    def test_short_queries_do_not_substring_match(self):
        with self.assertRaises(AppNotFound):
            resolve("vs", self.registry)
        self.assertIsNone(find_best_match("vs", {"devstudio": "/d"}))
    
    def test_ties_keep_first_key(self):
        match = find_best_match("abc", {"abcd1": "/one", "abcd2": "/two"})
        self.assertEqual(match.path, "/one")
    
    def test_not_found(self):
        with self.assertRaises(AppNotFound) as ctx:
            resolve("zzz", self.registry)
        self.assertIn("Unknown app: zzz", str(ctx.exception))
        with self.assertRaises(AppNotFound):
            resolve("!!!", self.registry)
    
    def test_sanitize_native_name(self):
        self.assertEqual(sanitize_native_name("  my app "), "my app")
        for bad in ["", "   ", "calc & del", "a|b", "x > y", "a;b", "\"q\"", "it's", "naïve", "a/b"]:
            with self.assertRaises(InvalidInput, msg=bad):
                sanitize_native_name(bad)


class TestLauncher(unittest.TestCase):
    """Test launching and failure classification."""
    
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.exe = Path(self._tmp.name) / "app.exe"
        self.exe.write_bytes(b"")
    
    def tearDown(self):
        self._tmp.cleanup()
    
    def test_missing_path(self):
        with self.assertRaises(PathNotFound):
            launch(str(Path(self._tmp.name) / "missing.exe"))
    
    def test_spawn_in_parent_directory(self):
        with patch("noddy.launcher.spawn_detached", return_value=4242) as spawn:
            self.assertEqual(launch(str(self.exe)), 4242)
        spawn.assert_called_once_with([str(self.exe)], cwd=self._tmp.name)
    
    def test_no_working_directory(self):
        with patch("noddy.launcher.Path.exists", return_value=True):
            with self.assertRaises(NoWorkingDirectory):
                launch("notepad.exe")
    
    def test_elevation_required(self):
        error = OSError(22, "The requested operation requires elevation")
        error.winerror = 740
        with patch("noddy.launcher.spawn_detached", side_effect=error):
            with self.assertRaises(ElevationRequired) as ctx:
                launch(str(self.exe))
        self.assertIn("admin rights", str(ctx.exception))
    
    @unittest.skipIf(sys.platform == "win32", "POSIX exec permissions")
    def test_elevation_text_in_path_is_plain_spawn_failure(self):
        exe = Path(self._tmp.name) / "build740" / "Elevation Manager"
        exe.parent.mkdir()
        exe.write_bytes(b"")
        exe.chmod(0o644)
        with self.assertRaises(SpawnFailed):
            launch(str(exe))
    
    def test_generic_spawn_failure(self):
        with patch("noddy.launcher.spawn_detached", side_effect=PermissionError("denied")):
            with self.assertRaises(SpawnFailed) as ctx:
                launch(str(self.exe))
        self.assertEqual(str(ctx.exception), "Spawn failed: denied")


class TestModels(unittest.TestCase):
    """Test data models."""
    
    def test_display_name_rejected(self):
        with self.assertRaises(ValidationError):
            DiscoveredApp(name="x", display_name="", path="/x", source=Source.PATH)
        with self.assertRaises(ValidationError):
            DiscoveredApp(name="x", display_name="x" * 121, path="/x", source=Source.PATH)
        DiscoveredApp(name="x", display_name="x" * 120, path="/x", source=Source.PATH)
    
    def test_discovered_app_frozen(self):
        entry = app("code", "/c")
        with self.assertRaises(ValidationError):
            entry.path = "/other"
    
    def test_source_values(self):
        self.assertEqual(
            {s.value for s in Source},
            {"path", "registry", "start_menu", "localappdata", "fallback"}
        )


class TestConfig(unittest.TestCase):
    """Test configuration management."""
    
    def test_default_config(self):
        config = Config()
        self.assertEqual(config.min_substring_query_length, 4)
        self.assertEqual(config.log_level, "WARNING")
        self.assertIn("code.cmd", config.path_candidates)
        self.assertEqual(config.system_fallbacks["cmd"], "cmd.exe")
        self.assertEqual(len(config.registry_root_pairs()), 3)
    
    def test_validation(self):
        with self.assertRaises(ValueError):
            Config(log_level="LOUD")
        with self.assertRaises(ValueError):
            Config(min_substring_query_length=0)
        with self.assertRaises(ValueError):
            Config(registry_roots=[{"hive": "HKCR", "path": "Software"}])
    
    def test_load_config_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/path/config.yaml")
    
    def test_load_config_defaults_without_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with patch("noddy.config.Path.home", return_value=Path(tmp)):
                config = load_config(None)
        self.assertEqual(config.min_substring_query_length, 4)
    
    def test_load_config_from_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("min_substring_query_length: 3\nlocal_app_names: [Zed]\n")
            config = load_config(path)
        self.assertEqual(config.min_substring_query_length, 3)
        self.assertEqual(config.local_app_names, ["Zed"])
    
    def test_load_config_invalid(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("- just\n- a list\n")
            with self.assertRaises(ValueError):
                load_config(path)
            path.write_text("unknown_option: 1\n")
            with self.assertRaises(ValueError):
                load_config(path)
    
    def test_example_config_loads(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "noddy.yaml"
            save_example_config(path)
            config = load_config(path)
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.system_fallbacks["notepad"], "notepad.exe")
        self.assertEqual(config.registry_root_pairs()[1][0], "HKLM")


if __name__ == "__main__":
    unittest.main()
