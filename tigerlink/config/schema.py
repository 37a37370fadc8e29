"""Manifest and settings schema definitions using Pydantic for validation.

The extension manifest (`tiger.config.json` and its script variants) is
validated into :class:`ExtensionManifest`. Manifest files use camelCase keys;
the models expose snake_case attributes and accept either spelling.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_NPM_NAME_RE = re.compile(
    r"^(@[a-z0-9-~][a-z0-9-._~]*/)?[a-z0-9-~][a-z0-9-._~]*$"
)
_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(-[a-z0-9.-]+)?(\+[a-z0-9.-]+)?$", re.I)
_ANDROID_PACKAGE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$")
_CLASS_NAME_RE = re.compile(r"^[A-Z][a-zA-Z0-9_]*$")

SUPPORTED_ANDROID_LANGUAGES = ("kotlin", "java")

_MANIFEST_MODEL_CONFIG = {"populate_by_name": True, "extra": "allow"}


class NativeModuleConfig(BaseModel):
    """Native module exported by an extension.

    Attributes:
        name: Registration name (e.g. "LocalStorage").
        class_name: Implementation class name (e.g. "LocalStorageModule").
    """

    name: str
    class_name: str = Field(alias="className")

    model_config = _MANIFEST_MODEL_CONFIG

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v: str) -> str:
        if not _CLASS_NAME_RE.match(v):
            raise ValueError(
                f"Invalid class name '{v}': must start with an uppercase letter "
                "and contain only letters, digits and underscores"
            )
        return v


class ElementConfig(BaseModel):
    """Custom UI element exported by an extension.

    Attributes:
        name: Element name in PascalCase (e.g. "ExplorerInput").
        tag_name: Optional explicit tag; defaults to the kebab-cased name.
        android_view_type: Optional native view class bound to the element.
    """

    name: str
    tag_name: Optional[str] = Field(default=None, alias="tagName")
    android_view_type: Optional[str] = Field(default=None, alias="androidViewType")

    model_config = _MANIFEST_MODEL_CONFIG

    @property
    def resolved_tag_name(self) -> str:
        return self.tag_name or to_kebab_case(self.name)


class AndroidConfig(BaseModel):
    """Android platform section of the manifest."""

    package_name: str = Field(alias="packageName")
    source_dir: str = Field(default="android/src/main", alias="sourceDir")
    build_types: List[str] = Field(
        default_factory=lambda: ["debug", "release"], alias="buildTypes"
    )
    language: str = "kotlin"

    model_config = _MANIFEST_MODEL_CONFIG

    @field_validator("package_name")
    @classmethod
    def validate_package_name(cls, v: str) -> str:
        if not _ANDROID_PACKAGE_RE.match(v):
            raise ValueError(
                f"Invalid Android package name '{v}'. "
                "Use reverse domain notation, e.g. com.example.extension"
            )
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        lowered = v.lower()
        if lowered not in SUPPORTED_ANDROID_LANGUAGES:
            raise ValueError(
                f"Invalid Android language '{v}'. "
                f"Valid languages: {', '.join(SUPPORTED_ANDROID_LANGUAGES)}"
            )
        return lowered


class IOSConfig(BaseModel):
    """iOS platform section of the manifest."""

    podspec_path: Optional[str] = Field(default=None, alias="podspecPath")
    source_dir: str = Field(default="ios/src", alias="sourceDir")
    frameworks: List[str] = Field(default_factory=list)

    model_config = _MANIFEST_MODEL_CONFIG


class WebConfig(BaseModel):
    """Web platform section of the manifest."""

    entry: str = "web/src/index.ts"

    model_config = _MANIFEST_MODEL_CONFIG


class PlatformsConfig(BaseModel):
    android: Optional[AndroidConfig] = None
    ios: Optional[IOSConfig] = None
    web: Optional[WebConfig] = None

    model_config = _MANIFEST_MODEL_CONFIG

    @model_validator(mode="after")
    def require_one_platform(self) -> "PlatformsConfig":
        if self.android is None and self.ios is None and self.web is None:
            raise ValueError(
                "At least one platform must be configured "
                "(add android, ios, or web to platforms)"
            )
        return self

    def names(self) -> List[str]:
        """Configured platform names in canonical order."""
        return [
            name
            for name, cfg in (
                ("android", self.android),
                ("ios", self.ios),
                ("web", self.web),
            )
            if cfg is not None
        ]


class ExtensionManifest(BaseModel):
    """Top-level extension manifest.

    Attributes:
        name: npm-style package name.
        version: Semver version.
        lynx_version: Minimum framework version range.
        platforms: Per-platform configuration.
        dependencies: Names of other extensions this one requires.
        native_modules: Native modules exported by the extension.
        elements: Custom elements exported by the extension.
        services: Service interface names exported by the extension.
    """

    name: str
    version: str
    lynx_version: Optional[str] = Field(default=None, alias="lynxVersion")
    platforms: PlatformsConfig
    dependencies: List[str] = Field(default_factory=list)
    native_modules: List[NativeModuleConfig] = Field(
        default_factory=list, alias="nativeModules"
    )
    elements: List[ElementConfig] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)

    model_config = _MANIFEST_MODEL_CONFIG

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _NPM_NAME_RE.match(v):
            raise ValueError(
                f"Invalid package name '{v}'. Package names follow npm naming "
                "conventions (e.g. @scope/extension-name or extension-name)"
            )
        return v

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if not _SEMVER_RE.match(v):
            raise ValueError(f"Invalid version '{v}'. Use semver, e.g. 1.0.0")
        return v

    @field_validator("native_modules", mode="before")
    @classmethod
    def expand_module_shorthand(cls, v: Any) -> Any:
        # Older manifests list bare class names.
        if isinstance(v, list):
            return [
                {"name": item, "className": item} if isinstance(item, str) else item
                for item in v
            ]
        return v

    @field_validator("elements", mode="before")
    @classmethod
    def expand_element_shorthand(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @property
    def android_package_name(self) -> Optional[str]:
        android = self.platforms.android
        return android.package_name if android else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtensionManifest":
        """Create a manifest from parsed JSON data.

        Raises:
            ValidationError: If the data violates the schema.
        """
        return cls.model_validate(data)


class CodegenSettings(BaseModel):
    """Engine settings for one code generation run.

    Attributes:
        src_file: Interface-definition source, relative to the project root.
        generate_android: Emit JVM target files.
        generate_ios: Emit Swift element templates.
        generate_web: Emit browser/runtime target files.
        custom_view_types: Fully-qualified Android view classes registered
            on top of the built-in table, so directives naming them resolve
            without a warning.
        allow_scripts: Allow evaluation of script manifests through Node.
        node_executable: Node binary used by the script adapter.
        script_timeout: Seconds allowed for evaluating a script manifest.
    """

    src_file: str = "src/module.ts"
    generate_android: bool = True
    generate_ios: bool = True
    generate_web: bool = True
    custom_view_types: List[str] = Field(default_factory=list)
    allow_scripts: bool = True
    node_executable: str = "node"
    script_timeout: float = Field(default=30.0, ge=1.0, le=600.0)

    @classmethod
    def default(cls) -> "CodegenSettings":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodegenSettings":
        return cls.model_validate(data)


def to_kebab_case(name: str) -> str:
    """Convert PascalCase to a kebab-case tag (ExplorerInput -> explorer-input)."""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()
