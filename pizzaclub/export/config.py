from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for the standings CSV export.
    """

    output_dir: Path = Path("pizzaclub/data/published")
    output_filename: str = "standings.csv"

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_filename


DEFAULT_EXPORT_CONFIG = ExportConfig()
