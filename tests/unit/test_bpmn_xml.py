"""
Tests for core.interchange.bpmn_xml.

Tests cover:
- Element naming on export (lowercased types, gateway suffix)
- Declaration order and condition expressions
- Import of exported documents and of modeller-style documents
- Parse errors
"""

import pytest
from lxml import etree

from core.errors import ExportError, ImportParseError
from core.interchange.bpmn_xml import BPMN_NAMESPACE, export_process, import_process
from core.process.model import Activity, Gateway, Process, SequenceFlow
from core.process.validation import validate_process


NS = "{%s}" % BPMN_NAMESPACE


def _process_children(xml):
    root = etree.fromstring(xml.encode("utf-8"))
    process = root.find(f"{NS}process")
    return [etree.QName(child).localname for child in process]


MODELLER_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" id="d1">
  <bpmn:process id="Process_1" name="Leave request" isExecutable="true">
    <!-- drawn in a modeller -->
    <bpmn:startEvent id="StartEvent_1" name="Requested" />
    <bpmn:userTask id="Task_1" name="Approve leave" />
    <bpmn:eventBasedGateway id="Gw_1" />
    <bpmn:endEvent id="EndEvent_1" />
    <bpmn:sequenceFlow id="Flow_1" sourceRef="StartEvent_1" targetRef="Task_1" />
    <bpmn:sequenceFlow id="Flow_2" sourceRef="Task_1" targetRef="EndEvent_1">
      <bpmn:conditionExpression>days &lt; 10</bpmn:conditionExpression>
    </bpmn:sequenceFlow>
  </bpmn:process>
</bpmn:definitions>
"""


class TestExport:
    """export_process()."""

    def test_document_shape(self, order_process):
        xml = export_process(order_process)
        root = etree.fromstring(xml.encode("utf-8"))

        assert xml.startswith("<?xml")
        assert root.tag == f"{NS}definitions"
        assert root.get("targetNamespace") == "http://flowforge.io/bpmn"
        process = root.find(f"{NS}process")
        assert process.get("id") == "process-order"
        assert process.get("name") == "Order Processing"
        assert process.get("isExecutable") == "true"

    def test_element_names_are_lowercased_types(self, approval):
        names = _process_children(export_process(approval))

        assert "startevent" in names
        assert "usertask" in names
        assert "servicetask" in names
        assert "exclusiveGateway" in names
        assert names.count("sequenceFlow") == 7

    def test_order_is_activities_gateways_flows(self, approval):
        names = [n for n in _process_children(export_process(approval)) if n != "documentation"]

        assert names[:6] == ["startevent", "endevent", "usertask", "usertask", "servicetask", "sendtask"]
        assert names[6] == "exclusiveGateway"
        assert set(names[7:]) == {"sequenceFlow"}

    def test_condition_expression(self, approval):
        root = etree.fromstring(export_process(approval).encode("utf-8"))
        flows = {f.get("id"): f for f in root.iter(f"{NS}sequenceFlow")}

        assert flows["flow4"].find(f"{NS}conditionExpression").text == "approved == true"
        assert flows["flow1"].find(f"{NS}conditionExpression") is None
        assert len(flows["flow1"]) == 0

    def test_non_ascii_names_survive(self):
        process = Process.create("订单流程")
        process.add_activity(Activity.create("审核", "UserTask", activity_id="review"))

        imported = import_process(export_process(process))

        assert imported.name == "订单流程"
        assert imported.find_activity("review").name == "审核"


class TestImport:
    """import_process()."""

    def test_exported_process_round_trips_counts(self, approval):
        imported = import_process(export_process(approval))

        assert len(imported.activities) == len(approval.activities)
        assert len(imported.sequence_flows) == len(approval.sequence_flows)
        assert len(imported.gateways) == len(approval.gateways)

    def test_exported_process_keeps_types_and_validation(self, approval):
        imported = import_process(export_process(approval))

        assert [a.type for a in imported.activities] == [a.type for a in approval.activities]
        assert imported.gateways[0].type == "Exclusive"
        assert validate_process(imported).is_valid
        assert imported.description == approval.description

    def test_conditions_are_read_back(self, approval):
        imported = import_process(export_process(approval))
        conditions = {f.id: f.condition_expression for f in imported.sequence_flows}

        assert conditions["flow4"] == "approved == true"
        assert conditions["flow1"] is None

    def test_modeller_document(self):
        process = import_process(MODELLER_XML)

        assert process.id == "Process_1"
        assert process.name == "Leave request"
        assert [(a.id, a.type) for a in process.activities] == [
            ("StartEvent_1", "StartEvent"),
            ("Task_1", "UserTask"),
            ("EndEvent_1", "EndEvent"),
        ]
        assert [(g.id, g.type) for g in process.gateways] == [("Gw_1", "EventBased")]
        assert process.sequence_flows[1].condition_expression == "days < 10"

    def test_missing_attributes_get_defaults(self):
        xml = (
            f'<definitions xmlns="{BPMN_NAMESPACE}"><process>'
            '<task/><parallelGateway/></process></definitions>'
        )
        process = import_process(xml)

        assert process.name == "Unnamed Process"
        assert process.id
        assert process.activities[0].id
        assert process.activities[0].name == ""
        assert process.gateways[0].type == "Parallel"

    def test_unknown_types_are_kept(self):
        xml = (
            f'<definitions xmlns="{BPMN_NAMESPACE}"><process id="p">'
            '<approvalTask id="a"/><customGateway id="g"/></process></definitions>'
        )
        process = import_process(xml)

        assert process.activities[0].type == "approvalTask"
        assert process.gateways[0].type == "custom"

    def test_import_does_not_seed_events(self):
        xml = f'<definitions xmlns="{BPMN_NAMESPACE}"><process id="p"/></definitions>'

        assert import_process(xml).activities == ()


class TestImportErrors:
    """Malformed and non-BPMN input."""

    def test_malformed_xml(self):
        with pytest.raises(ImportParseError) as exc_info:
            import_process("<definitions><process>")

        assert isinstance(exc_info.value.__cause__, etree.XMLSyntaxError)

    def test_empty_document(self):
        with pytest.raises(ImportParseError):
            import_process(b"")

    def test_missing_process_element(self):
        with pytest.raises(ImportParseError, match="No process element"):
            import_process(f'<definitions xmlns="{BPMN_NAMESPACE}"/>')

    def test_process_outside_bpmn_namespace(self):
        with pytest.raises(ImportParseError):
            import_process('<definitions><process id="p"><task/></process></definitions>')


class TestExportErrors:
    """Types that cannot become XML element names."""

    def test_activity_type_with_space(self):
        process = Process.create("Custom")
        process.add_activity(Activity.create("x", "Custom Task", activity_id="custom"))

        with pytest.raises(ExportError) as exc_info:
            export_process(process)

        assert exc_info.value.element_id == "custom"
        assert exc_info.value.code == "export_error"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_empty_activity_type(self):
        process = Process.create("Custom")
        process.add_activity(Activity.create("x", "", activity_id="blank"))

        with pytest.raises(ExportError, match="blank"):
            export_process(process)

    def test_gateway_type_with_colon(self):
        process = Process.create("Custom")
        process.add_gateway(Gateway.create("g", "bpmn:Exclusive", gateway_id="gw"))

        with pytest.raises(ExportError) as exc_info:
            export_process(process)

        assert exc_info.value.element_id == "gw"
