"""YAML process definitions.

Example::

    name: Order Processing
    description: Handles incoming orders
    activities:
      - id: receive
        name: Receive Order
        type: ReceiveTask
    flows:
      - source: start
        target: receive
      - source: receive
        target: end

Processes are built with :meth:`Process.create`, so ``start`` and
``end`` always exist and flows may reference them.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import structlog
import yaml

from core.process.model import Activity, ActivityType, Gateway, GatewayType, Process, SequenceFlow

logger = structlog.get_logger(__name__)


class ProcessDefinitionParser:
    """Builds a :class:`Process` from a YAML mapping."""

    def parse_file(self, yaml_file: Path) -> Process:
        """Parse a process definition from a YAML file"""
        with open(yaml_file, "r", encoding="utf-8") as f:
            content = f.read()
        return self.parse_string(content)

    def parse_string(self, yaml_content: str) -> Process:
        """Parse a process definition from a YAML string"""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}")

        if not isinstance(data, dict):
            raise ValueError("Process definition must be a mapping")
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Process:
        process = Process.create(
            name=self._get_required_string(data, "name"),
            description=self._get_string(data, "description"),
            process_id=self._get_optional_string(data, "id"),
        )
        if "version" in data:
            process.version = str(data["version"])

        seen: Set[str] = {a.id for a in process.activities}

        for index, item in enumerate(self._get_list(data, "activities")):
            activity = Activity.create(
                name=self._get_required_string(item, "name", f"activities[{index}]"),
                type=self._get_string(item, "type", ActivityType.TASK),
                activity_id=self._get_optional_string(item, "id"),
                properties={str(k): str(v) for k, v in (item.get("properties") or {}).items()},
            )
            self._claim(activity.id, seen)
            process.add_activity(activity)

        for item in self._get_list(data, "gateways"):
            gateway = Gateway.create(
                name=self._get_string(item, "name"),
                type=self._get_string(item, "type", GatewayType.EXCLUSIVE),
                gateway_id=self._get_optional_string(item, "id"),
            )
            self._claim(gateway.id, seen)
            process.add_gateway(gateway)

        for index, item in enumerate(self._get_list(data, "flows")):
            path = f"flows[{index}]"
            flow = SequenceFlow.create(
                source_ref=self._get_required_string(item, "source", path),
                target_ref=self._get_required_string(item, "target", path),
                condition_expression=self._get_optional_string(item, "condition"),
                flow_id=self._get_optional_string(item, "id"),
            )
            self._claim(flow.id, seen)
            process.add_sequence_flow(flow)

        logger.debug(
            "process_definition_parsed",
            process_id=process.id,
            activities=len(process.activities),
            flows=len(process.sequence_flows),
        )
        return process

    def _claim(self, element_id: str, seen: Set[str]) -> None:
        if element_id in seen:
            raise ValueError(f"Duplicate element id '{element_id}'")
        seen.add(element_id)

    def _get_list(self, data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
        value = data.get(key) or []
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            raise ValueError(f"Field '{key}' must be a list of mappings")
        return value

    def _get_required_string(self, data: Dict[str, Any], key: str, path: str = "") -> str:
        label = f"{path}.{key}" if path else key
        if key not in data:
            raise ValueError(f"Required field '{label}' is missing")
        value = data[key]
        if not isinstance(value, str):
            raise ValueError(f"Field '{label}' must be a string")
        return value

    def _get_string(self, data: Dict[str, Any], key: str, default: str = "") -> str:
        value = data.get(key, default)
        if not isinstance(value, str):
            raise ValueError(f"Field '{key}' must be a string")
        return value

    def _get_optional_string(self, data: Dict[str, Any], key: str) -> Optional[str]:
        value = data.get(key)
        if value is None:
            return None
        return str(value)


def load_process_file(yaml_file: Path) -> Process:
    """Convenience function to load a process from a YAML file"""
    return ProcessDefinitionParser().parse_file(yaml_file)


def load_process_string(yaml_content: str) -> Process:
    """Convenience function to load a process from a YAML string"""
    return ProcessDefinitionParser().parse_string(yaml_content)
