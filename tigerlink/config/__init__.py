"""Manifest schema and engine settings for tigerlink."""

from .schema import (
    AndroidConfig,
    CodegenSettings,
    ElementConfig,
    ExtensionManifest,
    IOSConfig,
    NativeModuleConfig,
    PlatformsConfig,
    WebConfig,
    to_kebab_case,
)

__all__ = [
    "AndroidConfig",
    "CodegenSettings",
    "ElementConfig",
    "ExtensionManifest",
    "IOSConfig",
    "NativeModuleConfig",
    "PlatformsConfig",
    "WebConfig",
    "to_kebab_case",
]
