"""Built-in sample processes used by the in-memory repository and the CLI."""

from .model import Activity, ActivityType, Gateway, GatewayType, Process, SequenceFlow

ORDER_PROCESS_ID = "process-order"
APPROVAL_PROCESS_ID = "process-approval"


def order_processing_process() -> Process:
    """Linear order fulfilment: eight activities, seven flows."""
    process = Process.create(
        "Order Processing",
        "Receives, validates, pays for and ships a customer order",
        process_id=ORDER_PROCESS_ID,
    )
    steps = [
        ("receive-order", "Receive Order", ActivityType.RECEIVE_TASK),
        ("validate-order", "Validate Order", ActivityType.SERVICE_TASK),
        ("check-inventory", "Check Inventory", ActivityType.SERVICE_TASK),
        ("process-payment", "Process Payment", ActivityType.SERVICE_TASK),
        ("ship-order", "Ship Order", ActivityType.USER_TASK),
        ("notify-customer", "Notify Customer", ActivityType.SEND_TASK),
    ]
    for activity_id, name, type_ in steps:
        process.add_activity(Activity.create(name, type_, activity_id=activity_id))

    chain = [Process.START_ID] + [s[0] for s in steps] + [Process.END_ID]
    for index, (source, target) in enumerate(zip(chain, chain[1:]), start=1):
        process.add_sequence_flow(
            SequenceFlow.create(source, target, flow_id=f"flow{index}")
        )
    return process


def approval_process() -> Process:
    """Request approval with an exclusive decision."""
    process = Process.create(
        "Approval Workflow",
        "Submits a request and routes it on the manager's decision",
        process_id=APPROVAL_PROCESS_ID,
    )
    process.add_activity(Activity.create("Submit Request", ActivityType.USER_TASK, activity_id="submit-request"))
    process.add_activity(Activity.create("Manager Review", ActivityType.USER_TASK, activity_id="manager-review"))
    process.add_activity(Activity.create("Approve", ActivityType.SERVICE_TASK, activity_id="approve"))
    process.add_activity(Activity.create("Reject", ActivityType.SEND_TASK, activity_id="reject"))
    process.add_gateway(Gateway.create("Approved?", GatewayType.EXCLUSIVE, gateway_id="gateway1"))

    flows = [
        ("flow1", "start", "submit-request", None),
        ("flow2", "submit-request", "manager-review", None),
        ("flow3", "manager-review", "gateway1", None),
        ("flow4", "gateway1", "approve", "approved == true"),
        ("flow5", "gateway1", "reject", "approved == false"),
        ("flow6", "approve", "end", None),
        ("flow7", "reject", "end", None),
    ]
    for flow_id, source, target, condition in flows:
        process.add_sequence_flow(
            SequenceFlow.create(source, target, condition_expression=condition, flow_id=flow_id)
        )
    return process


SAMPLES = {
    "order": order_processing_process,
    "approval": approval_process,
}
