"""BPMN-flavoured XML import and export.

Export writes element names mechanically from the internal type strings:
an activity of type ``UserTask`` becomes ``<usertask>`` and a gateway of
type ``Exclusive`` becomes ``<exclusiveGateway>``. Import accepts both
that form and the camelCase names used by BPMN modelling tools.
"""

from typing import Dict, Optional, Union
from uuid import uuid4

import structlog
from lxml import etree

from core.errors import ExportError, ImportParseError
from core.process.model import Activity, ActivityType, Gateway, GatewayType, Process, SequenceFlow

logger = structlog.get_logger(__name__)

BPMN_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/MODEL"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
TARGET_NAMESPACE = "http://flowforge.io/bpmn"

DEFAULT_PROCESS_NAME = "Unnamed Process"

_ACTIVITY_TYPES: Dict[str, str] = {name.lower(): name for name in ActivityType.ALL}
_GATEWAY_TYPES: Dict[str, str] = {name.lower(): name for name in GatewayType.ALL}


def _tag(local_name: str) -> str:
    return "{%s}%s" % (BPMN_NAMESPACE, local_name)


def export_process(process: Process) -> str:
    """Serialize a process to BPMN XML.

    Raises:
        ExportError: an element type does not form a valid XML tag name.
    """
    root = etree.Element(
        _tag("definitions"),
        nsmap={None: BPMN_NAMESPACE, "xsi": XSI_NAMESPACE},
    )
    root.set("id", f"Definitions_{process.id}")
    root.set("targetNamespace", TARGET_NAMESPACE)

    process_elem = etree.SubElement(root, _tag("process"))
    process_elem.set("id", process.id)
    process_elem.set("name", process.name)
    process_elem.set("isExecutable", "true")

    if process.description:
        doc = etree.SubElement(process_elem, _tag("documentation"))
        doc.text = process.description

    for activity in process.activities:
        elem = _element(process_elem, activity.type.lower(), activity.id)
        elem.set("id", activity.id)
        elem.set("name", activity.name)

    for gateway in process.gateways:
        elem = _element(process_elem, gateway.type.lower() + "Gateway", gateway.id)
        elem.set("id", gateway.id)
        elem.set("name", gateway.name)

    for flow in process.sequence_flows:
        elem = etree.SubElement(process_elem, _tag("sequenceFlow"))
        elem.set("id", flow.id)
        elem.set("sourceRef", flow.source_ref)
        elem.set("targetRef", flow.target_ref)
        if flow.condition_expression:
            condition = etree.SubElement(elem, _tag("conditionExpression"))
            condition.set("{%s}type" % XSI_NAMESPACE, "tFormalExpression")
            condition.text = flow.condition_expression

    xml = etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    ).decode("utf-8")

    logger.info(
        "process_exported",
        process_id=process.id,
        activities=len(process.activities),
        gateways=len(process.gateways),
        flows=len(process.sequence_flows),
    )
    return xml


def import_process(xml: Union[str, bytes]) -> Process:
    """Parse BPMN XML into a process.

    Raises:
        ImportParseError: the document is malformed or has no
            ``process`` element in the BPMN model namespace.
    """
    data = xml.encode("utf-8") if isinstance(xml, str) else xml
    if not data.strip():
        raise ImportParseError("Empty BPMN document")

    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
    )
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        logger.warning("process_import_failed", reason=str(e))
        raise ImportParseError(f"Invalid BPMN XML: {e}", line=e.lineno) from e

    process_elem = next(root.iter(_tag("process")), None)
    if process_elem is None:
        logger.warning("process_import_failed", reason="missing process element")
        raise ImportParseError("No process element found in BPMN namespace")

    activities = []
    gateways = []
    flows = []
    description = ""

    for child in process_elem:
        if not isinstance(child.tag, str):
            continue

        local_name = etree.QName(child).localname
        lowered = local_name.lower()

        if "gateway" in lowered:
            gateways.append(
                Gateway(
                    id=child.get("id") or str(uuid4()),
                    name=child.get("name", ""),
                    type=_gateway_type(local_name),
                )
            )
        elif "task" in lowered or "event" in lowered:
            activities.append(
                Activity(
                    id=child.get("id") or str(uuid4()),
                    name=child.get("name", ""),
                    type=_ACTIVITY_TYPES.get(lowered, local_name),
                )
            )
        elif local_name == "sequenceFlow":
            flows.append(
                SequenceFlow(
                    id=child.get("id") or str(uuid4()),
                    source_ref=child.get("sourceRef", ""),
                    target_ref=child.get("targetRef", ""),
                    condition_expression=_condition_text(child),
                )
            )
        elif local_name == "documentation":
            description = (child.text or "").strip()

    process = Process.restore(
        id=process_elem.get("id") or str(uuid4()),
        name=process_elem.get("name") or DEFAULT_PROCESS_NAME,
        description=description,
        activities=activities,
        sequence_flows=flows,
        gateways=gateways,
    )
    logger.info(
        "process_imported",
        process_id=process.id,
        activities=len(activities),
        gateways=len(gateways),
        flows=len(flows),
    )
    return process


def _element(parent, local_name: str, element_id: str):
    try:
        return etree.SubElement(parent, _tag(local_name))
    except ValueError as e:
        logger.warning("process_export_failed", element_id=element_id, tag=local_name)
        raise ExportError(
            f"Element '{element_id}' has a type that is not a valid XML name: {local_name!r}",
            element_id=element_id,
        ) from e


def _gateway_type(local_name: str) -> str:
    base = local_name[:-len("gateway")] if local_name.lower().endswith("gateway") else local_name
    return _GATEWAY_TYPES.get(base.lower(), base)


def _condition_text(flow_elem) -> Optional[str]:
    for child in flow_elem:
        if isinstance(child.tag, str) and etree.QName(child).localname == "conditionExpression":
            text = (child.text or "").strip()
            return text or None
    return None
