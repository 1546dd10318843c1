"""
End-to-end tests for the command-line interface.

Uses the offline dummy service, so no network access or API key is needed.

Run with: pytest tests/test_cli.py -v
"""

import json

import pytest
from typer.testing import CliRunner

from i18n_adapt import __version__
from i18n_adapt.cli import app

APP_JS = """\
import React from 'react';

export default function App() {
  return (
    <main>
      <h1>Welcome to our store</h1>
      <button onClick={() => alert('saved')}>Save</button>
    </main>
  );
}
"""

runner = CliRunner()


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"react": "^18"}}))
    (tmp_path / "src" / "App.js").write_text(APP_JS, encoding="utf-8")
    return tmp_path


def resource_of(project):
    return project / "src" / "locales" / "translations.json"


def invoke(*args):
    return runner.invoke(app, list(args))


class TestRun:

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_init_only(self, project):
        result = invoke("run", "--init-only", "--path", str(project))
        assert result.exit_code == 0, result.output
        assert resource_of(project).exists()
        assert (project / "src" / "i18n.js").exists()
        assert "initialized" in result.output

    def test_translate_and_merge(self, project):
        invoke("run", "--init-only", "--path", str(project))

        result = invoke(
            "run", "--path", str(project), "--language", "fr",
            "--service", "dummy", "--delay", "0", "--no-ui-fix",
        )
        assert result.exit_code == 0, result.output

        data = json.loads(resource_of(project).read_text(encoding="utf-8"))
        assert data["fr"]["forms"]["save"] == "[fr] Save"
        assert data["fr"]["navigation"]["home"] == "[fr] Home"
        assert data["en"]["forms"]["save"] == "Save"
        assert data["en"]["common"] == {"retry": "Retry"}
        assert data["en"]["errors"] == {"error": "Error"}
        assert data["en"]["messages"]["loading"] == "Loading"
        assert len(list(resource_of(project).parent.glob("*.backup-*"))) == 1
        # UI left untouched
        assert (project / "src" / "App.js").read_text(encoding="utf-8") == APP_JS

    def test_incremental_run_keeps_manual_edits(self, project):
        invoke("run", "--init-only", "--path", str(project))
        args = ["run", "--path", str(project), "-l", "es", "--service", "dummy",
                "--delay", "0", "--no-ui-fix"]
        invoke(*args)

        path = resource_of(project)
        data = json.loads(path.read_text(encoding="utf-8"))
        data["es"]["custom"] = {"tagline": "Hecho a mano"}
        path.write_text(json.dumps(data), encoding="utf-8")

        result = invoke(*args)
        assert result.exit_code == 0, result.output
        assert "already up to date" in result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["es"]["custom"] == {"tagline": "Hecho a mano"}

        assert invoke(*args, "--force-all").exit_code == 0
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "custom" not in data["es"]

    def test_requires_init(self, project):
        result = invoke("run", "--path", str(project), "--service", "dummy", "--delay", "0")
        assert result.exit_code == 1
        assert "--init-only" in result.output
        assert not resource_of(project).exists()

    def test_unimplemented_service(self, project):
        invoke("run", "--init-only", "--path", str(project))
        result = invoke("run", "--path", str(project), "--service", "azure", "--no-ui-fix")
        assert result.exit_code == 1
        assert "not implemented" in result.output

    def test_extract_only_writes_nothing(self, project):
        invoke("run", "--init-only", "--path", str(project))
        before = resource_of(project).read_text(encoding="utf-8")

        result = invoke("run", "--path", str(project), "--extract-only", "--no-ui-fix")
        assert result.exit_code == 0, result.output
        assert "Extracted strings" in result.output
        assert resource_of(project).read_text(encoding="utf-8") == before

    def test_ui_fix(self, project):
        result = invoke("run", "--path", str(project), "--extract-only")
        assert result.exit_code == 0, result.output
        assert 'className="lang-wrap"' in (project / "src" / "App.js").read_text(encoding="utf-8")
        assert (project / "src" / "ResponsiveLanguage.css").exists()


class TestKeys:

    def test_unknown_action(self):
        result = invoke("keys", "rotate", "gemini")
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_service_required(self):
        result = invoke("keys", "status")
        assert result.exit_code == 1
        assert "Service name required" in result.output

    def test_status_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "AIza-test-key-123456")
        result = invoke("keys", "status", "gemini")
        assert result.exit_code == 0
        assert "env" in result.output
        assert "AIza...3456" in result.output
