"""Configuration models for Task Registry."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class RegistryConfig:
    """Where the registry keeps its data and how far archive scans reach."""

    data_dir: Path
    tasks_file_name: str = "tasks.json"
    archive_dir_name: str = "memory"
    max_archive_files: int = 10
    max_archive_results: int = 500

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        for name in ('max_archive_files', 'max_archive_results'):
            value = int(getattr(self, name))
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")
            setattr(self, name, value)

    @property
    def tasks_file(self) -> Path:
        return self.data_dir / self.tasks_file_name

    @property
    def archive_dir(self) -> Path:
        return self.data_dir / self.archive_dir_name

    def to_dict(self) -> dict:
        """Convert to dictionary (data_dir is implied by the file location)."""
        return {
            'tasksFileName': self.tasks_file_name,
            'archiveDirName': self.archive_dir_name,
            'maxArchiveFiles': self.max_archive_files,
            'maxArchiveResults': self.max_archive_results,
        }

    @classmethod
    def from_dict(cls, data_dir: Path, data: dict) -> 'RegistryConfig':
        """Create from dictionary, falling back to defaults for missing keys."""
        defaults = cls(data_dir=data_dir)
        return cls(
            data_dir=data_dir,
            tasks_file_name=data.get('tasksFileName', defaults.tasks_file_name),
            archive_dir_name=data.get('archiveDirName', defaults.archive_dir_name),
            max_archive_files=int(data.get('maxArchiveFiles', defaults.max_archive_files)),
            max_archive_results=int(data.get('maxArchiveResults', defaults.max_archive_results)),
        )
