"""Calculator settings loaded from YAML."""
import yaml
from dataclasses import dataclass
from pathlib import Path


@dataclass
class CalculatorSettings:
    """Defaults and limits for the portion controls and ingredient search."""

    default_original_portions: int = 4
    default_desired_portions: int = 4
    max_desired_portions: int = 20
    debounce_ms: int = 500  # Input inactivity before a lookup is dispatched
    min_query_length: int = 3  # Shorter (trimmed) queries never hit the provider
    mock_delay_ms: int = 1000  # Simulated latency of the mock provider

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @property
    def mock_delay_seconds(self) -> float:
        return self.mock_delay_ms / 1000.0


class SettingsLoader:
    """Loader for calculator settings from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize settings loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing settings
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> CalculatorSettings:
        """Load settings from YAML file.

        Sections or keys missing from the file keep their defaults.

        Returns:
            CalculatorSettings object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If a value is not an integer or a limit is below 1
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        defaults = CalculatorSettings()
        portions = data.get("portions") or {}
        search = data.get("search") or {}

        settings = CalculatorSettings(
            default_original_portions=int(
                portions.get("default_original", defaults.default_original_portions)
            ),
            default_desired_portions=int(
                portions.get("default_desired", defaults.default_desired_portions)
            ),
            max_desired_portions=int(
                portions.get("max_desired", defaults.max_desired_portions)
            ),
            debounce_ms=int(search.get("debounce_ms", defaults.debounce_ms)),
            min_query_length=int(
                search.get("min_query_length", defaults.min_query_length)
            ),
            mock_delay_ms=int(search.get("mock_delay_ms", defaults.mock_delay_ms)),
        )

        if settings.max_desired_portions < 1:
            raise ValueError(
                f"max_desired must be at least 1, got {settings.max_desired_portions}"
            )
        if settings.default_original_portions < 1:
            raise ValueError(
                f"default_original must be at least 1, got {settings.default_original_portions}"
            )
        if not 1 <= settings.default_desired_portions <= settings.max_desired_portions:
            raise ValueError(
                f"default_desired must be between 1 and {settings.max_desired_portions}, "
                f"got {settings.default_desired_portions}"
            )

        return settings
