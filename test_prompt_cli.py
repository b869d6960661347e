#!/usr/bin/env python3
"""
Tests for the prompt line: path shortening, configuration loading, styled
tokens and the ``precmd`` command.
"""

import io
import logging
import os
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from git import Actor, Repo

# Add the project root to the path so we can import promptline modules
sys.path.insert(0, str(Path(__file__).parent))

from promptline.cli import build_prompt_line, main
from promptline.colored_tokens import Color, Token, TokenSeq
from promptline.config import Config, load_configuration
from promptline.platform import shorten_path


class TestShortenPath(unittest.TestCase):
    """Replacing the home directory prefix with ``~``."""

    def test_home_prefix(self):
        self.assertEqual(shorten_path("/home/alice/src/app", "/home/alice"), "~/src/app")

    def test_home_itself(self):
        self.assertEqual(shorten_path("/home/alice", "/home/alice"), "~")

    def test_trailing_separator_on_home(self):
        self.assertEqual(shorten_path("/home/alice/src", "/home/alice/"), "~/src")

    def test_outside_home(self):
        self.assertEqual(shorten_path("/var/log", "/home/alice"), "/var/log")

    def test_prefix_must_end_on_component(self):
        self.assertEqual(shorten_path("/home/alicebob/src", "/home/alice"), "/home/alicebob/src")

    def test_only_leading_occurrence_is_replaced(self):
        self.assertEqual(shorten_path("/srv/home/alice", "/home/alice"), "/srv/home/alice")
        self.assertEqual(
            shorten_path("/home/alice/home/alice", "/home/alice"), "~/home/alice"
        )

    def test_unknown_home(self):
        self.assertEqual(shorten_path("/home/alice/src", None), "/home/alice/src")

    def test_accepts_paths(self):
        self.assertEqual(shorten_path(Path("/home/alice/src"), Path("/home/alice")), "~/src")


class TestColoredTokens(unittest.TestCase):
    """ANSI rendering of tokens."""

    def test_plain_token(self):
        self.assertEqual(Token("main").render(), "main")

    def test_colored_token(self):
        self.assertEqual(Token("main", Color.GREEN).render(), "\033[32mmain\033[0m")

    def test_bold_colored_token(self):
        self.assertEqual(Token("Ｘ", Color.RED, bold=True).render(), "\033[1;31mＸ\033[0m")

    def test_color_disabled(self):
        self.assertEqual(Token("＊", Color.BLUE).render(enable_color=False), "＊")

    def test_sequence_concatenates_without_separator(self):
        seq = TokenSeq((Token("main", Color.GREEN),)).append(Token(" ✔", Color.GREEN, bold=True))
        self.assertEqual(len(seq), 2)
        self.assertEqual(seq.plain, "main ✔")
        self.assertEqual(seq.render(), "\033[32mmain\033[0m\033[1;32m ✔\033[0m")


class TestConfiguration(unittest.TestCase):
    """Loading configuration from the environment."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.missing_env_file = self.temp_dir / "missing.env"

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_configuration(self.missing_env_file)

        self.assertEqual(config.log_level, "WARNING")
        self.assertIsNone(config.log_file)
        self.assertTrue(config.enable_color)

    def test_environment_overrides(self):
        env = {
            "PROMPTLINE_LOG_LEVEL": "debug",
            "PROMPTLINE_COLOR": "off",
            "PROMPTLINE_HOME": "/home/alice",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_configuration(self.missing_env_file)

        self.assertEqual(config.log_level, "DEBUG")
        self.assertFalse(config.enable_color)
        self.assertEqual(config.home_dir, Path("/home/alice"))

    def test_no_color_disables_color(self):
        with patch.dict(os.environ, {"NO_COLOR": "1"}, clear=True):
            config = load_configuration(self.missing_env_file)

        self.assertFalse(config.enable_color)

    def test_env_file(self):
        env_file = self.temp_dir / "promptline.env"
        env_file.write_text("PROMPTLINE_LOG_LEVEL=ERROR\nPROMPTLINE_COLOR=false\n")

        with patch.dict(os.environ, {"PROMPTLINE_COLOR": "true"}, clear=True):
            config = load_configuration(env_file)

        self.assertEqual(config.log_level, "ERROR")
        self.assertTrue(config.enable_color)

    def test_invalid_values(self):
        for env in ({"PROMPTLINE_LOG_LEVEL": "LOUD"}, {"PROMPTLINE_COLOR": "maybe"}):
            with self.subTest(env=env):
                with patch.dict(os.environ, env, clear=True):
                    with self.assertRaises(ValueError) as ctx:
                        load_configuration(self.missing_env_file)
                self.assertIn("Configuration error", str(ctx.exception))


class TestPrecmd(unittest.TestCase):
    """The printed prompt line."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp()).resolve()
        self.config = Config(enable_color=False, home_dir=self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _make_repo(self):
        repo_dir = self.temp_dir / "project"
        repo = Repo.init(repo_dir, initial_branch="main")
        (repo_dir / "README.md").write_text("hello\n")
        repo.index.add(["README.md"])
        actor = Actor("Prompt Tester", "tester@example.com")
        repo.index.commit("Initial commit", author=actor, committer=actor)
        repo.close()
        return repo_dir

    def test_outside_repository(self):
        plain = self.temp_dir / "plain"
        plain.mkdir()

        self.assertEqual(build_prompt_line(plain, self.config), "~/plain ")

    def test_inside_repository(self):
        repo_dir = self._make_repo()
        (repo_dir / "todo.txt").write_text("later\n")

        self.assertEqual(build_prompt_line(repo_dir, self.config), "~/project main？")

    def test_colored_line(self):
        repo_dir = self._make_repo()
        config = Config(enable_color=True, home_dir=self.temp_dir)

        line = build_prompt_line(repo_dir, config)
        self.assertTrue(line.startswith("\033[34m~/project\033[0m "))
        self.assertIn("\033[32mmain\033[0m", line)

    def test_unknown_directory(self):
        self.assertEqual(build_prompt_line(None, self.config), " ")

    def test_main_prints_line_and_exits_zero(self):
        repo_dir = self._make_repo()
        output = io.StringIO()
        with patch("promptline.cli.get_current_directory", return_value=repo_dir), \
                patch("promptline.cli.load_configuration", return_value=self.config), \
                redirect_stdout(output):
            exit_code = main(["precmd"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(output.getvalue(), "~/project main ✔\n")

    def test_main_survives_summary_errors(self):
        repo_dir = self._make_repo()
        output = io.StringIO()
        with patch("promptline.cli.get_current_directory", return_value=repo_dir), \
                patch("promptline.cli.load_configuration", return_value=self.config), \
                patch("promptline.cli.summarize", side_effect=RuntimeError("boom")), \
                redirect_stdout(output):
            exit_code = main(["precmd"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(output.getvalue(), "~/project \n")

    def test_main_falls_back_on_bad_configuration(self):
        plain = self.temp_dir / "plain"
        plain.mkdir()
        output = io.StringIO()
        with patch("promptline.cli.get_current_directory", return_value=plain), \
                patch("promptline.cli.load_configuration", side_effect=ValueError("Configuration error: bad")), \
                redirect_stdout(output):
            exit_code = main(["precmd"])

        self.assertEqual(exit_code, 0)
        self.assertIn("plain", output.getvalue())
        self.assertTrue(output.getvalue().endswith(" \n"))

    def test_malformed_env_file_writes_nothing_to_stderr(self):
        plain = self.temp_dir / "plain"
        plain.mkdir()
        env_file = self.temp_dir / "promptline.env"
        env_file.write_text("this line is not valid\nPROMPTLINE_LOG_LEVEL=ERROR\nneither is this one\n")
        output = io.StringIO()
        errors = io.StringIO()
        env = {"PROMPTLINE_HOME": str(self.temp_dir), "PROMPTLINE_COLOR": "false"}

        # Records no handler claims go to logging.lastResort, i.e. stderr
        with patch("promptline.config.DEFAULT_ENV_FILE", env_file), \
                patch("promptline.cli.get_current_directory", return_value=plain), \
                patch.dict(os.environ, env), \
                patch.object(logging.getLogger(), "handlers", []), \
                patch.object(logging, "lastResort", logging.StreamHandler(errors)), \
                redirect_stdout(output), redirect_stderr(errors):
            exit_code = main(["precmd"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(output.getvalue(), "~/plain \n")
        self.assertEqual(errors.getvalue(), "")

    def test_unknown_arguments_are_ignored(self):
        repo_dir = self._make_repo()
        output = io.StringIO()
        errors = io.StringIO()
        with patch("promptline.cli.get_current_directory", return_value=repo_dir), \
                patch("promptline.cli.load_configuration", return_value=self.config), \
                redirect_stdout(output), redirect_stderr(errors):
            exit_code = main(["precmd", "--x", "extra"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(output.getvalue(), "~/project main ✔\n")
        self.assertEqual(errors.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
