"""
Configuration Management

Handles loading and managing configuration files for the data actions discovery tool.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .constants import (
    AzureEnvironments, ClusterType, ErrorMessages, FileConstants, NetworkConstants, OperationsConstants
)
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and validation"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'cluster': {
            'type': dict,
            'required': False,
            'fields': {
                'type': {'type': str, 'required': False, 'choices': ClusterType.values()},
                'kubeconfig': {'type': str, 'required': False}
            }
        },
        'azure': {
            'type': dict,
            'required': False,
            'fields': {
                'environment': {'type': str, 'required': False},
                'tenant_id': {'type': str, 'required': False},
                'client_id': {'type': str, 'required': False},
                'client_secret': {'type': str, 'required': False},
                'aks_login_url': {'type': str, 'required': False}
            }
        },
        'discovery': {
            'type': dict,
            'required': False,
            'fields': {
                'parallel': {'type': bool, 'required': False},
                'follow_next_link': {'type': bool, 'required': False},
                'max_pages': {'type': int, 'required': False},
                'timeout': {'type': int, 'required': False}
            }
        },
        'global': {
            'type': dict,
            'required': False,
            'fields': {
                'skip_tls': {'type': bool, 'required': False},
                'debug': {'type': bool, 'required': False}
            }
        },
    }

    def __init__(self):
        """Initialize configuration manager"""
        self.config_data = {}
        self.config_file_path = None

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Args:
            config_path: Path to configuration file

        Returns:
            Dict containing configuration data

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid
        """
        config_file = Path(config_path)

        if not config_file.is_file():
            raise ConfigurationError(ErrorMessages.ConfigError.CONFIG_FILE_NOT_FOUND.format(config_path=config_path))

        try:
            with open(config_file, 'r') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

        self.config_file_path = config_path
        logger.info(f"Successfully loaded configuration from {config_path}")

        self._validate_config()

        return self.config_data

    def _validate_config(self) -> None:
        """
        Validate configuration structure and values

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self.config_data, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        self._validate_against_schema(self.config_data, self.CONFIG_SCHEMA, "config")

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigurationError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key in data:
                value = data[key]

                # Skip None values for optional fields
                if value is None and not field_schema.get('required', False):
                    continue

                expected_type = field_schema['type']
                # bool is an int subclass; do not accept it where a number is expected
                if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
                    raise ConfigurationError(f"{current_path} must be a {expected_type.__name__}")

                if 'choices' in field_schema and value not in field_schema['choices']:
                    choices_str = ', '.join(f"'{c}'" for c in field_schema['choices'])
                    raise ConfigurationError(f"{current_path} must be one of: {choices_str}")

                if expected_type == dict and 'fields' in field_schema:
                    self._validate_against_schema(value, field_schema['fields'], current_path)

            elif field_schema.get('required', False):
                raise ConfigurationError(f"Required field {current_path} is missing")

    def get_config(self) -> Dict[str, Any]:
        """Get a copy of the current configuration data"""
        return self.config_data.copy()

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get specific configuration section

        Args:
            section: Section name (e.g., 'cluster', 'azure')

        Returns:
            Dict containing section data, empty dict if section doesn't exist
        """
        return self.config_data.get(section) or {}

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key

        Args:
            key: Configuration key (supports dot notation like 'azure.tenant_id')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config_data

        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default

        return default if value is None else value

    def get_config_template_content(self) -> str:
        """
        Generate configuration template content as string without file I/O

        Returns:
            str: YAML configuration template content
        """
        header = (
            "# Data actions discovery configuration file\n"
            "# cluster.type must be one of:\n"
            + "".join(f"#   {cluster_type}\n" for cluster_type in ClusterType.values())
        )
        template = {
            'cluster': {
                'type': ClusterType.CONNECTED_CLUSTERS.value,
                'kubeconfig': ""
            },
            'azure': {
                'environment': AzureEnvironments.PUBLIC_CLOUD.name,
                'tenant_id': "",
                'client_id': "",
                'client_secret': "",
                'aks_login_url': ""
            },
            'discovery': {
                'parallel': True,
                'follow_next_link': False,
                'max_pages': OperationsConstants.DEFAULT_MAX_PAGES,
                'timeout': NetworkConstants.DEFAULT_TIMEOUT
            },
            'global': {
                'skip_tls': False,
                'debug': False
            }
        }

        return header + yaml.safe_dump(template, default_flow_style=False, sort_keys=False)

    def generate_config_template(self, output_dir: str = None) -> str:
        """
        Generate configuration template file

        Args:
            output_dir: Directory to save template (optional)

        Returns:
            str: Path to generated template file

        Raises:
            ConfigurationError: If template generation fails
        """
        if output_dir:
            output_path = Path(output_dir)
            config_file = output_path / FileConstants.DEFAULT_CONFIG_FILE
        else:
            output_path = None
            config_file = Path(FileConstants.DEFAULT_CONFIG_FILE)

        try:
            if output_path is not None:
                output_path.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w') as f:
                f.write(self.get_config_template_content())
        except OSError as e:
            raise ConfigurationError(f"Failed to generate configuration template: {e}") from e

        logger.info(f"Configuration template generated: {config_file}")
        return str(config_file)
