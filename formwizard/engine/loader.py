"""ConfigLoader - loads wizard configurations from YAML and validates them."""

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from .schema import WizardConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = 'FORMWIZARD_CONFIG_DIR'


class ConfigLoader:
    """
    Loads wizard configurations from YAML files.

    YAML cannot carry functions, so `customValidator` and `canProceed` may
    name a callable registered on the loader:

        validations:
          - type: custom
            customValidator: booking.end_after_start
            message: End date must be on or after start date

    Validates structure using Pydantic models.
    """

    def __init__(self, base_path: Optional[Path] = None,
                 validators: Optional[Dict[str, Callable]] = None,
                 gates: Optional[Dict[str, Callable]] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory holding <name>.yaml configs
                       (default: $FORMWIZARD_CONFIG_DIR, else ./forms)
            validators: Named custom validators, (value, form_data) -> bool
            gates: Named step gates, (form_data) -> bool | str
        """
        if base_path is None:
            env_path = os.environ.get(CONFIG_DIR_ENV)
            base_path = Path(env_path) if env_path else Path.cwd() / "forms"
        self.base_path = Path(base_path)
        self.validators: Dict[str, Callable] = dict(validators or {})
        self.gates: Dict[str, Callable] = dict(gates or {})

    def register_validator(self, name: str, fn: Callable) -> None:
        self.validators[name] = fn

    def register_gate(self, name: str, fn: Callable) -> None:
        self.gates[name] = fn

    def load_config(self, name: str) -> WizardConfig:
        """
        Load a named wizard configuration from the base path.

        Args:
            name: Config name (e.g., 'event-booking' for event-booking.yaml)

        Returns:
            Validated WizardConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If YAML doesn't match schema
            ValueError: If a named hook isn't registered
        """
        return self.load_file(self.base_path / f"{name}.yaml")

    def load_file(self, path: Union[str, Path]) -> WizardConfig:
        """Load a wizard configuration from an explicit YAML path."""
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Wizard config not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        logger.debug(f"Loaded wizard config from {config_path}")
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> WizardConfig:
        """
        Validate an already-loaded mapping, resolving named hooks.

        The input mapping is not modified.
        """
        data = copy.deepcopy(data)

        for step in _children(data, 'steps'):
            self._resolve(step, ('canProceed', 'can_proceed'), self.gates, 'step gate')

            for group in _children(step, 'fieldGroups', 'field_groups'):
                for field in _children(group, 'fields'):
                    for rule in _children(field, 'validations'):
                        self._resolve(rule, ('customValidator', 'custom_validator'),
                                      self.validators, 'validator')

        return WizardConfig.model_validate(data)

    def _resolve(self, node: Any, keys, registry: Dict[str, Callable], kind: str) -> None:
        if not isinstance(node, dict):
            return
        for key in keys:
            hook = node.get(key)
            if not isinstance(hook, str):
                continue
            if hook not in registry:
                raise ValueError(f"Unknown {kind}: {hook}")
            node[key] = registry[hook]


def _children(node: Any, *keys: str) -> List[Any]:
    """List under the first present key; malformed nodes are left for schema validation."""
    if not isinstance(node, dict):
        return []
    for key in keys:
        value = node.get(key)
        if isinstance(value, list):
            return value
    return []
