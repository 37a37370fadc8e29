"""Tests for manifest and settings models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tigerlink.config.schema import CodegenSettings, ExtensionManifest, to_kebab_case


def _base(**extra):
    data = {
        "name": "@acme/ext-maps",
        "version": "2.1.0-beta.1",
        "platforms": {"android": {"packageName": "com.acme.maps", "language": "Java"}},
    }
    data.update(extra)
    return data


def test_camel_case_manifest_is_accepted() -> None:
    manifest = ExtensionManifest.from_dict(
        _base(
            lynxVersion=">=3.0.0",
            nativeModules=[{"name": "Maps", "className": "MapsModule"}],
            elements=[{"name": "MapView", "tagName": "acme-map"}],
            services=["GeoService"],
        )
    )

    assert manifest.lynx_version == ">=3.0.0"
    assert manifest.platforms.android.language == "java"
    assert manifest.platforms.android.source_dir == "android/src/main"
    assert manifest.platforms.names() == ["android"]
    assert manifest.native_modules[0].class_name == "MapsModule"
    assert manifest.elements[0].resolved_tag_name == "acme-map"
    assert manifest.services == ["GeoService"]


def test_shorthand_entries_are_expanded() -> None:
    manifest = ExtensionManifest.from_dict(
        _base(nativeModules=["MapsModule"], elements=["ExplorerInput"])
    )

    assert manifest.native_modules[0].name == "MapsModule"
    assert manifest.native_modules[0].class_name == "MapsModule"
    assert manifest.elements[0].resolved_tag_name == "explorer-input"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "Ext Maps"},
        {"version": "1.0"},
        {"platforms": {}},
        {"platforms": {"android": {"packageName": "maps"}}},
        {"platforms": {"android": {"packageName": "com.acme.maps", "language": "scala"}}},
        {"nativeModules": [{"name": "maps", "className": "mapsModule"}]},
    ],
)
def test_invalid_manifests_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        ExtensionManifest.from_dict(_base(**overrides))


def test_unknown_keys_are_kept() -> None:
    manifest = ExtensionManifest.from_dict(_base(homepage="https://example.com"))

    assert manifest.model_extra == {"homepage": "https://example.com"}


def test_codegen_settings_defaults() -> None:
    settings = CodegenSettings.default()

    assert settings.src_file == "src/module.ts"
    assert settings.allow_scripts is True
    with pytest.raises(ValidationError):
        CodegenSettings.from_dict({"script_timeout": 1000})


@pytest.mark.parametrize(
    "name, expected",
    [
        ("ExplorerInput", "explorer-input"),
        ("Badge", "badge"),
        ("MyHTMLView", "my-htmlview"),
    ],
)
def test_to_kebab_case(name: str, expected: str) -> None:
    assert to_kebab_case(name) == expected
