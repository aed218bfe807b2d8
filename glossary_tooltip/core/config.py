"""
Glossary Tooltip Central Configuration
Contains annotation limits, markup labels, and vocabulary location
"""

from dataclasses import dataclass
from typing import Optional
import os

import yaml


@dataclass
class AnnotatorConfig:
    """Configuration for tooltip rendering and term substitution"""

    # Descriptions longer than this get truncated with a "Read more" link
    max_description_length: int = 100
    read_more_label: str = "Read more"

    # Reproduce the ordered multi-pass replace of the CMS formatter
    legacy_ordered_replace: bool = False

    # Canonical term route, used when a term has an id but no explicit url
    detail_url_template: str = "/taxonomy/term/{term_id}"

    def __post_init__(self):
        if self.max_description_length < 0:
            raise ValueError(
                f"max_description_length must be >= 0, got {self.max_description_length}"
            )


@dataclass
class GlossaryTooltipConfig:
    """Main configuration class combining all settings"""

    annotator: AnnotatorConfig

    # Vocabulary file (YAML or JSON)
    vocabulary_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    def __init__(self,
                 annotator: Optional[AnnotatorConfig] = None,
                 vocabulary_path: Optional[str] = None,
                 log_level: str = "INFO"):
        """Initialize with optional custom configurations"""
        self.annotator = annotator or AnnotatorConfig()
        self.vocabulary_path = vocabulary_path
        self.log_level = log_level

        # Override with environment variables if present
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables"""
        if os.getenv("GLOSSARY_TOOLTIP_VOCABULARY"):
            self.vocabulary_path = os.getenv("GLOSSARY_TOOLTIP_VOCABULARY")

        if os.getenv("GLOSSARY_TOOLTIP_MAX_LENGTH"):
            value = os.getenv("GLOSSARY_TOOLTIP_MAX_LENGTH")
            try:
                max_length = int(value)
            except ValueError:
                raise ValueError(f"GLOSSARY_TOOLTIP_MAX_LENGTH must be an integer, got {value!r}")
            if max_length < 0:
                raise ValueError(f"GLOSSARY_TOOLTIP_MAX_LENGTH must be >= 0, got {max_length}")
            self.annotator.max_description_length = max_length

        if os.getenv("GLOSSARY_TOOLTIP_LEGACY", "").lower() in ("true", "1", "yes"):
            self.annotator.legacy_ordered_replace = True

        if os.getenv("GLOSSARY_TOOLTIP_DEBUG", "").lower() in ("true", "1", "yes"):
            self.log_level = "DEBUG"

    @classmethod
    def load_from_file(cls, config_path: str) -> 'GlossaryTooltipConfig':
        """Load configuration from YAML file"""
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

            annotator = AnnotatorConfig(**config_data.get('annotator', {}))
            config = cls(annotator=annotator)

            # Override other settings
            for key, value in config_data.items():
                if key != 'annotator' and hasattr(config, key):
                    setattr(config, key, value)

            # Environment still wins over the file
            config._load_env_overrides()
            return config

        except (OSError, yaml.YAMLError, TypeError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    def save_to_file(self, config_path: str):
        """Save configuration to YAML file"""
        config_data = {
            'annotator': {
                'max_description_length': self.annotator.max_description_length,
                'read_more_label': self.annotator.read_more_label,
                'legacy_ordered_replace': self.annotator.legacy_ordered_replace,
                'detail_url_template': self.annotator.detail_url_template,
            },
            'vocabulary_path': self.vocabulary_path,
            'log_level': self.log_level,
        }

        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)
