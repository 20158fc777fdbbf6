"""Tests for the build command."""

from pathlib import Path

from fxpack.cli.main import app


class TestBuildCommand:
    def test_builds_every_discovered_resource(self, runner, cli_env, make_resource):
        make_resource("A", {"files": ["a.txt"]}, files={"a.txt": "a"})
        make_resource("B", {}, parent="[core]")

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 0, result.stdout
        assert (cli_env / "A" / "a.txt").read_text() == "a"
        assert (cli_env / "A" / "fxmanifest.lua").exists()
        assert (cli_env / "B" / "fxmanifest.lua").exists()
        assert "Build Complete" in result.stdout

    def test_builds_named_resources_only(self, runner, cli_env, make_resource):
        make_resource("A", {})
        make_resource("B", {})

        result = runner.invoke(app, ["build", "B"])

        assert result.exit_code == 0, result.stdout
        assert not (cli_env / "A").exists()
        assert (cli_env / "B" / "fxmanifest.lua").exists()

    def test_unknown_resource_fails(self, runner, cli_env, make_resource):
        make_resource("A", {})

        result = runner.invoke(app, ["build", "missing"])

        assert result.exit_code == 1
        assert "missing" in result.stdout

    def test_empty_source_tree_fails(self, runner, cli_env):
        result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert "No resources found" in result.stdout

    def test_ambiguous_target_fails(self, runner, cli_env, make_resource):
        make_resource("A", {"files": ["$B/*.lua:one.lua"]})
        make_resource("B", {}, files={"a.lua": "", "b.lua": ""})

        result = runner.invoke(app, ["build", "A"])

        assert result.exit_code == 1

    def test_force_wipes_output(self, runner, cli_env, make_resource):
        make_resource("A", {})
        stale = Path(cli_env / "A" / "stale.txt")
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        result = runner.invoke(app, ["build", "A", "--force"])

        assert result.exit_code == 0, result.stdout
        assert not stale.exists()
