"""Folders module: the folder table the importer checks targets against."""

from .models import Folder
from .service import FolderService

__all__ = ["Folder", "FolderService"]
