"""
Configuration dataclasses for image restoration.

This module provides the configuration class controlling damage
simulation and SOR reconstruction, with YAML round-tripping.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class InpaintConfig:
    """
    Configuration for damage simulation and SOR reconstruction.

    Parameters
    ----------
    use_manual_mask : bool
        If True, the known-mask is the complement of the painted damage mask.
        If False, damage is drawn at random. Default: True.
    damage_percent : float
        Percentage of pixels damaged by the random strategy, in [0, 100].
        Default: 30.0.
    brush_size : int
        Brush diameter in pixels used when painting the damage mask.
        Default: 15.
    lambda_fidelity : float
        Fidelity weight. Accepted and recorded, but the relaxation does not
        use it. Default: 0.5.
    beta_smoothness : float
        Smoothness weight. Accepted and recorded, but the relaxation does not
        use it. Default: 1.5.
    max_iter : int
        Maximum number of relaxation sweeps. Default: 1000.
    tol : float
        Stop after the first sweep whose mean absolute change is below tol.
        Values near machine epsilon may never trigger. Default: 1e-4.
    seed : Optional[int]
        Seed for the random damage generator. None draws from fresh OS
        entropy (non-reproducible). Default: None.
    show_progress : bool
        Display a tqdm progress bar over sweeps. Default: False.

    Examples
    --------
    >>> config = InpaintConfig(use_manual_mask=False, damage_percent=40.0, seed=7)
    >>> config.to_yaml_file("inpaint_config.yaml")
    >>> loaded = InpaintConfig.from_yaml_file("inpaint_config.yaml")
    """

    # Damage model
    use_manual_mask: bool = True
    damage_percent: float = 30.0
    brush_size: int = 15
    seed: Optional[int] = None

    # Variational weights (inert)
    lambda_fidelity: float = 0.5
    beta_smoothness: float = 1.5

    # Solver
    max_iter: int = 1000
    tol: float = 1e-4
    show_progress: bool = False

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if not 0 <= self.damage_percent <= 100:
            raise ValueError(f"damage_percent must be in [0, 100], got {self.damage_percent}")
        if self.brush_size < 1:
            raise ValueError(f"brush_size must be >= 1, got {self.brush_size}")

        if self.lambda_fidelity < 0:
            raise ValueError(f"lambda_fidelity must be non-negative, got {self.lambda_fidelity}")
        if self.beta_smoothness < 0:
            raise ValueError(f"beta_smoothness must be non-negative, got {self.beta_smoothness}")

        if isinstance(self.max_iter, bool) or not isinstance(self.max_iter, int):
            raise ValueError(f"max_iter must be an integer, got {self.max_iter!r}")
        if self.tol <= 0:
            raise ValueError(f"tol must be positive, got {self.tol}")

        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative if specified, got {self.seed}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary for serialization.

        Returns
        -------
        Dict[str, Any]
            Dictionary representation of configuration.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InpaintConfig":
        """
        Create configuration from dictionary.

        Parameters
        ----------
        data : Dict[str, Any]
            Dictionary with configuration parameters. Unknown keys are ignored.

        Returns
        -------
        InpaintConfig
            Configuration instance.
        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered_data)

    def to_yaml_file(self, filepath: Path) -> Path:
        """
        Save configuration to YAML file.

        Parameters
        ----------
        filepath : Path
            Output YAML file path.

        Returns
        -------
        Path
            Path to written file.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        return filepath

    @classmethod
    def from_yaml_file(cls, filepath: Path) -> "InpaintConfig":
        """
        Load configuration from YAML file.

        Parameters
        ----------
        filepath : Path
            Input YAML file path.

        Returns
        -------
        InpaintConfig
            Configuration instance.
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, "r") as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    def copy_with_overrides(self, **kwargs) -> "InpaintConfig":
        """
        Create a copy with specified parameters overridden.

        Examples
        --------
        >>> config = InpaintConfig()
        >>> quick = config.copy_with_overrides(max_iter=50, tol=1e-3)
        """
        current_dict = self.to_dict()
        current_dict.update(kwargs)
        return self.from_dict(current_dict)


def export_default_config(output_dir: Path, filename: str = "inpaint_config.yaml") -> Path:
    """
    Export default configuration template to YAML file.

    Parameters
    ----------
    output_dir : Path
        Directory to save configuration file.
    filename : str
        Output filename. Default: 'inpaint_config.yaml'.

    Returns
    -------
    Path
        Path to exported configuration file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / filename
    InpaintConfig().to_yaml_file(filepath)

    return filepath
