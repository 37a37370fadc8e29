"""Per-run settings shared by every generator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tigerlink.config.schema import ExtensionManifest
from tigerlink.errors import GenerationError


@dataclass(frozen=True)
class CodegenContext:
    """Where and in which JVM language generated files go.

    Attributes:
        project_root: Extension root; every output path is below it.
        android_package_name: Java package of generated JVM classes. None
            disables the JVM target.
        android_language: "kotlin" or "java".
        android_base_dir: Android source set root relative to project_root.
        ios_source_dir: iOS sources relative to project_root.
        generate_android: Emit JVM target files.
        generate_ios: Emit Swift element templates.
        generate_web: Emit browser/runtime target files.
    """

    project_root: Path
    android_package_name: Optional[str] = None
    android_language: str = "kotlin"
    android_base_dir: str = "android/src/main"
    ios_source_dir: str = "ios/src"
    generate_android: bool = True
    generate_ios: bool = True
    generate_web: bool = True

    @classmethod
    def from_manifest(
        cls,
        manifest: ExtensionManifest,
        project_root: Path,
        *,
        generate_android: bool = True,
        generate_ios: bool = True,
        generate_web: bool = True,
    ) -> "CodegenContext":
        android = manifest.platforms.android
        ios = manifest.platforms.ios
        return cls(
            project_root=Path(project_root),
            android_package_name=android.package_name if android else None,
            android_language=android.language if android else "kotlin",
            android_base_dir=android.source_dir if android else "android/src/main",
            ios_source_dir=ios.source_dir if ios else "ios/src",
            generate_android=generate_android and android is not None,
            generate_ios=generate_ios and ios is not None,
            generate_web=generate_web,
        )

    @property
    def file_extension(self) -> str:
        return "java" if self.android_language == "java" else "kt"

    @property
    def android_source_dir(self) -> str:
        return "java" if self.android_language == "java" else "kotlin"

    @property
    def android_enabled(self) -> bool:
        return self.generate_android and self.android_package_name is not None

    @property
    def android_package_dir(self) -> Path:
        if not self.android_package_name:
            raise GenerationError("No Android package name configured")
        return (
            self.project_root
            / self.android_base_dir
            / self.android_source_dir
            / Path(*self.android_package_name.split("."))
        )

    @property
    def android_generated_dir(self) -> Path:
        return self.android_package_dir / "generated"

    @property
    def ios_src_dir(self) -> Path:
        return self.project_root / self.ios_source_dir

    @property
    def contracts_dir(self) -> Path:
        return self.project_root / "generated"

    @property
    def web_src_dir(self) -> Path:
        return self.project_root / "web" / "src"

    @property
    def web_generated_dir(self) -> Path:
        return self.web_src_dir / "generated"

    def android_file(self, class_name: str, *, generated: bool = False) -> Path:
        directory = self.android_generated_dir if generated else self.android_package_dir
        return directory / f"{class_name}.{self.file_extension}"
