# userlib_cleaner/src/userlib_cleaner/core/config.py

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Archive layout
    archive_extension: str = Field(default=".jar")
    manifest_entry: str = Field(default="META-INF/MANIFEST.MF")
    descriptor_pattern: str = Field(default=r"^META-INF/maven/[^/]+/[^/]+/pom\.properties$")

    # Manifest titles shared by many unrelated libraries
    generic_titles: List[str] = Field(default_factory=lambda: [
        "Apache Commons",
        "Apache Log4j",
        "Eclipse Jetty Project",
        "Spring Framework",
    ])

    # Class-path inference
    namespace_roots: List[str] = Field(default_factory=lambda: [
        "com", "org", "net", "io", "javax", "jakarta", "edu",
    ])
    namespace_depth: int = Field(default=3, ge=1)

    # Filename heuristic
    local_namespace: str = Field(default="local.")

    workers: int = Field(default=1, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "USERLIB_CLEANER_",
        "extra": "ignore"
    }

    def is_generic_title(self, title: str) -> bool:
        lowered = title.strip().lower()
        return any(lowered == generic.lower() for generic in self.generic_titles)


# Instantiate settings
settings = Settings()
