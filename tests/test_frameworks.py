"""
Tests for framework detection, scraping and UI patching.

Run with: pytest tests/test_frameworks.py -v
"""

import json

import pytest

from i18n_adapt.classify import classify
from i18n_adapt.detect import detect_framework, detect_structure
from i18n_adapt.frameworks import get_adapter
from i18n_adapt.frameworks.base import SEED_TRANSLATIONS, add_class_hooks, extract_phrases
from i18n_adapt.frameworks.react import add_lang_attribute
from i18n_adapt.keygen import derive_key
from i18n_adapt.models import Framework
from i18n_adapt.resource import load_resource

APP_JS = """\
import React from 'react';
import { useTranslation } from 'react-i18next';

function App() {
  const { i18n } = useTranslation();
  const changeLanguage = (lng) => {
    i18n.changeLanguage(lng);
  };
  return (
    <div className="App">
      <h1>Welcome to our store</h1>
      <p>Browse the latest arrivals</p>
      <input placeholder="Search products" />
      <button onClick={() => changeLanguage('es')}>Save</button>
      <span>{count}</span>
    </div>
  );
}

export default App;
"""

COMPONENT_VUE = """\
<template>
  <div>
    <button @click="save">Save</button>
    <p :class="tone">Status unknown</p>
  </div>
</template>

<script>
const hidden = '<b>Not a phrase</b>';
</script>
"""


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def react_project(tmp_path):
    write(tmp_path / "package.json", json.dumps({
        "dependencies": {"react": "^18.0.0", "i18next": "^23.0.0"},
    }))
    write(tmp_path / "src" / "App.js", APP_JS)
    return tmp_path


class TestDetection:

    def test_react_from_dependencies(self, react_project):
        assert detect_framework(react_project) == Framework.REACT

    def test_vue_from_dependencies(self, tmp_path):
        write(tmp_path / "package.json", json.dumps({"dependencies": {"vue": "^3.0.0"}}))
        assert detect_framework(tmp_path) == Framework.VUE

    def test_angular_from_config_file(self, tmp_path):
        write(tmp_path / "angular.json", "{}")
        assert detect_framework(tmp_path) == Framework.ANGULAR

    def test_vue_from_file_extension(self, tmp_path):
        write(tmp_path / "src" / "components" / "Nav.vue", COMPONENT_VUE)
        assert detect_framework(tmp_path) == Framework.VUE

    def test_defaults_to_react(self, tmp_path):
        assert detect_framework(tmp_path) == Framework.REACT

    def test_existing_resource_location_preferred(self, react_project):
        existing = write(react_project / "src" / "i18n" / "translations.json", "{}")
        structure = detect_structure(react_project, Framework.REACT)
        assert structure.resource_file == existing
        assert structure.resource_exists

    def test_default_resource_location(self, react_project):
        structure = detect_structure(react_project, Framework.REACT)
        assert structure.resource_file == react_project / "src" / "locales" / "translations.json"
        assert not structure.resource_exists
        assert structure.ui_files == [react_project / "src" / "App.js"]


class TestExtraction:

    def test_text_nodes_and_attributes(self):
        assert sorted(extract_phrases(APP_JS)) == [
            "Browse the latest arrivals",
            "Save",
            "Search products",
            "Welcome to our store",
        ]

    def test_skips_numbers_single_chars_and_templates(self):
        assert extract_phrases("<b>42</b><i>x</i><em>${total}</em>") == []

    def test_jsx_string_attribute(self):
        assert extract_phrases('<img alt={"Company logo"} />') == ["Company logo"]


class TestClassHooks:

    def test_adds_classes(self):
        content, changed = add_class_hooks('<p>Hello there</p><button>Go now</button>', "className")
        assert changed
        assert '<p className="lang-wrap">Hello there</p>' in content
        assert '<button className="lang-btn">Go now</button>' in content

    def test_extends_static_class(self):
        content, _ = add_class_hooks('<span class="muted">Note text</span>', "class")
        assert content == '<span class="lang-wrap muted">Note text</span>'

    def test_leaves_dynamic_class_alone(self):
        source = '<p :class="tone">Status</p>'
        assert add_class_hooks(source, "class") == (source, False)

    def test_is_idempotent(self):
        once, _ = add_class_hooks("<h2>Title text</h2>", "class")
        twice, changed = add_class_hooks(once, "class")
        assert twice == once
        assert not changed

    def test_lang_attribute_added_once(self):
        patched = add_lang_attribute(APP_JS)
        assert "document.documentElement.lang = lng;" in patched
        assert add_lang_attribute(patched) == patched


class TestReactAdapter:

    def test_initialize(self, react_project):
        structure = detect_structure(react_project, Framework.REACT)
        created = get_adapter("react").initialize(structure)

        loader = react_project / "src" / "i18n.js"
        assert created == [structure.resource_file, structure.responsive_css_file, loader]
        assert load_resource(structure.resource_file)["en"]["navigation"]["home"] == "Home"
        assert "import translations from './locales/translations.json';" in loader.read_text()

        # second run creates nothing
        assert get_adapter("react").initialize(structure) == []

    def test_seed_is_filed_where_a_scan_would_file_it(self):
        for namespace, keys in SEED_TRANSLATIONS["en"].items():
            for key, text in keys.items():
                assert classify(text).value == namespace
                assert derive_key(text) == key

    def test_scan_includes_existing_source_values(self, react_project):
        structure = detect_structure(react_project, Framework.REACT)
        adapter = get_adapter(Framework.REACT)
        adapter.initialize(structure)
        structure = detect_structure(react_project, Framework.REACT)

        scan = adapter.scan(structure)
        assert {"Save", "Welcome to our store", "Home", "Loading"} <= scan.texts
        assert "en" in scan.existing

    def test_update_ui(self, react_project):
        structure = detect_structure(react_project, Framework.REACT)
        adapter = get_adapter(Framework.REACT)
        app = react_project / "src" / "App.js"

        changed = adapter.update_ui(structure)
        assert set(changed) == {structure.responsive_css_file, app}

        content = app.read_text()
        assert "import React from 'react';\nimport './ResponsiveLanguage.css';" in content
        assert '<h1 className="lang-wrap">Welcome to our store</h1>' in content
        assert "changeLanguage('es')} className=\"lang-btn\">Save</button>" in content
        assert "document.documentElement.lang = lng;" in content

        # nothing left to do on a second pass
        assert adapter.update_ui(structure) == []


class TestVueAdapter:

    def test_scan_only_reads_template(self, tmp_path):
        write(tmp_path / "src" / "App.vue", COMPONENT_VUE)
        structure = detect_structure(tmp_path, Framework.VUE)
        scan = get_adapter("vue").scan(structure)
        assert scan.texts == {"Save", "Status unknown"}

    def test_update_ui_patches_template(self, tmp_path):
        component = write(tmp_path / "src" / "App.vue", COMPONENT_VUE)
        write(tmp_path / "src" / "main.js", "import { createApp } from 'vue';\n")
        structure = detect_structure(tmp_path, Framework.VUE)

        get_adapter("vue").update_ui(structure)

        content = component.read_text()
        assert '<button @click="save" class="lang-btn">Save</button>' in content
        assert '<p :class="tone">Status unknown</p>' in content
        assert "const hidden = '<b>Not a phrase</b>';" in content
        assert "import './ResponsiveLanguage.css';" in (tmp_path / "src" / "main.js").read_text()


class TestAngularAdapter:

    def test_initialize_and_update(self, tmp_path):
        write(tmp_path / "angular.json", "{}")
        template = write(tmp_path / "src" / "app" / "app.component.html", "<h1>Dashboard overview</h1>\n")
        styles = write(tmp_path / "src" / "styles.css", "body { margin: 0; }\n")
        structure = detect_structure(tmp_path, detect_framework(tmp_path))
        adapter = get_adapter(structure.framework)

        created = adapter.initialize(structure)
        assert structure.resource_file in created
        assert structure.resource_file.parent == tmp_path / "src" / "assets" / "i18n"

        adapter.update_ui(structure)
        assert styles.read_text().startswith("@import './ResponsiveLanguage.css';\n")
        assert template.read_text() == '<h1 class="lang-wrap">Dashboard overview</h1>\n'

    def test_unknown_framework(self):
        from i18n_adapt.errors import UnsupportedFrameworkError

        with pytest.raises(UnsupportedFrameworkError):
            get_adapter("svelte")
