"""curriculex utilities."""

from .content_loader import load_curriculum, load_curriculum_dir, get_available_curricula

__all__ = [
    "load_curriculum",
    "load_curriculum_dir",
    "get_available_curricula",
]
