"""Configuration objects and constants for the export converter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_OUTPUT = "output"

DATE_FOLDERS_NONE = "none"
DATE_FOLDERS_YEAR = "year"
DATE_FOLDERS_YEAR_MONTH = "year-month"
DATE_FOLDER_CHOICES = (DATE_FOLDERS_NONE, DATE_FOLDERS_YEAR, DATE_FOLDERS_YEAR_MONTH)

SAVE_IMAGES_CHOICES = ("none", "attached", "scraped", "all", "offline")
# modes where content <img> references are rewritten to the local images folder
SCRAPED_IMAGE_MODES = frozenset({"scraped", "all"})


@dataclass(frozen=True)
class PathConfig:
    """Settings that control where posts land and how their content is rewritten."""

    output: Path = Path(DEFAULT_OUTPUT)
    date_folders: str = DATE_FOLDERS_NONE
    prefix_date: bool = False
    post_folders: bool = True
    save_images: str = "all"

    @property
    def rewrites_image_paths(self) -> bool:
        return self.save_images in SCRAPED_IMAGE_MODES
