"""Text rendering of view models.

Every function returns a list of output lines and copes with missing
optional fields by printing a placeholder.
"""

import json
from collections.abc import Mapping
from typing import Any

from ecs_pilot.models import (
    Cluster,
    ContainerInstance,
    ContainerInstanceRecord,
    Failure,
    InstanceStateChange,
    LaunchedInstance,
    Resource,
    RunTaskResult,
    Task,
    TaskDefinition,
    TaskRecord,
)
from ecs_pilot.utils.ids import extract_task_definition_name

EMPTY = "<empty>"


def _value(value: Any) -> str:
    """Format an optional scalar."""
    if value is None:
        return EMPTY
    return str(value)


def _enumerated(items: list[str], suffix: str = "") -> list[str]:
    return [f"{i}: {item}{suffix}" for i, item in enumerate(items, start=1)]


# Clusters


def render_cluster_list(clusters: list[Cluster]) -> list[str]:
    lines = [f"There are {len(clusters)} clusters"]
    lines.extend(_enumerated([c.arn for c in clusters]))
    return lines


def render_cluster(cluster: Cluster) -> list[str]:
    return [
        f'Name: "{_value(cluster.name)}"',
        f"ARN: {_value(cluster.arn)}",
        f"Registered instances count: {_value(cluster.registered_container_instances_count)}",
        f"Pending tasks count: {_value(cluster.pending_tasks_count)}",
        f"Running tasks count: {_value(cluster.running_tasks_count)}",
        f"Active services count: {_value(cluster.active_services_count)}",
        f"Status: {_value(cluster.status)}",
    ]


# Failures


def render_failure(failure: Failure) -> list[str]:
    line = f"Failure: {_value(failure.arn)} reason: {_value(failure.reason)}"
    if failure.detail:
        line += f" ({failure.detail})"
    return [line]


# Container instances


def render_container_instance_list(cluster_name: str, arns: list[str]) -> list[str]:
    lines = [f'{len(arns)} instances for cluster "{cluster_name}"']
    lines.extend(_enumerated(arns))
    return lines


def _render_resources(label: str, resources: list[Resource]) -> list[str]:
    lines = [f"There are ({len(resources)}) {label} resources."]
    for i, resource in enumerate(resources, start=1):
        lines.append(f"\t {i}. {resource.name}: {_value(resource.value)}")
    return lines


def render_container_instance(instance: ContainerInstance) -> list[str]:
    lines = [
        f"Container ARN: {_value(instance.arn)}",
        f"EC2-ID: {_value(instance.ec2_instance_id)}",
        f"Status: {_value(instance.status)}",
        f"Running Task Count: {_value(instance.running_tasks_count)}",
        f"Pending Task Count: {_value(instance.pending_tasks_count)}",
    ]
    lines.extend(_render_resources("registered", instance.registered_resources))
    lines.extend(_render_resources("remaining", instance.remaining_resources))
    lines.append(f"Agent connected: {_value(instance.agent_connected)}")
    lines.append(
        f"Agent updated status: {instance.agent_update_status or 'never requested.'}"
    )
    lines.append(f"There are ({len(instance.attributes)}) attributes.")
    for i, attribute in enumerate(instance.attributes, start=1):
        value = attribute.value if attribute.value is not None else "nil"
        lines.append(f"\t{i}.  {attribute.name}: {value}")
    return lines


def render_container_instance_records(
    records: Mapping[str, ContainerInstanceRecord],
) -> list[str]:
    lines: list[str] = []
    for record in records.values():
        if record.instance is not None:
            lines.extend(render_container_instance(record.instance))
        else:
            lines.append(f"No instance description for {record.arn}")
        if record.failure is not None:
            lines.extend(render_failure(record.failure))
        lines.append("")
    return lines


def render_launched_instances(
    cluster_name: str, instances: list[LaunchedInstance]
) -> list[str]:
    lines = [f"Launched ({len(instances)}) instances for cluster {cluster_name}."]
    for i, instance in enumerate(instances, start=1):
        lines.append(
            f"{i}: {instance.instance_id} ({_value(instance.instance_type)}, "
            f"{_value(instance.image_id)}) state: {_value(instance.state)}"
        )
    return lines


def render_terminated_instance(
    container_instance_arn: str, changes: list[InstanceStateChange]
) -> list[str]:
    lines = [f"Terminated container instance {container_instance_arn}."]
    for change in changes:
        lines.append(
            f"{change.instance_id}: {_value(change.previous_state)} -> "
            f"{_value(change.current_state)}"
        )
    return lines


# Tasks


def render_task(task: Task) -> list[str]:
    task_definition = (
        extract_task_definition_name(task.task_definition_arn)
        if task.task_definition_arn
        else None
    )
    lines = [
        f"Task ARN: {_value(task.arn)}",
        f"Cluster ARN: {_value(task.cluster_arn)}",
        f"Container ARN: {_value(task.container_instance_arn)}",
        f"Task Definition: {_value(task_definition)}",
        f"Last Status: {_value(task.last_status)}",
        f"Desired Status: {_value(task.desired_status)}",
        f"There are ({len(task.containers)}) associated containers.",
    ]
    for i, container in enumerate(task.containers, start=1):
        lines.extend(
            [
                f"\t{i}. Name: {_value(container.name)}",
                f"\tContainer Arn: {_value(container.arn)}",
                f"\tTask Arn: {_value(container.task_arn)}",
                f"\tReason: {_value(container.reason)}",
                f"\tLast Status: {_value(container.last_status)}",
                f"\tExit Code: {_value(container.exit_code)}",
                "\tContainer Network Bindings:",
            ]
        )
        for j, binding in enumerate(container.network_bindings, start=1):
            lines.append(
                f"\t\t{j}. IP: {_value(binding.bind_ip)}"
                f" Container Port: {_value(binding.container_port)}"
                f" -> Host Port: {_value(binding.host_port)}"
                f"  ({_value(binding.protocol)})"
            )
    return lines


def render_task_records(records: Mapping[str, TaskRecord]) -> list[str]:
    lines: list[str] = []
    count = 1
    for record in records.values():
        if record.task is not None:
            task_lines = render_task(record.task)
            lines.append(f"{count}: {task_lines[0]}")
            lines.extend(task_lines[1:])
            count += 1
        else:
            lines.append(f"No task description for {record.arn}")
        if record.failure is not None:
            lines.extend(render_failure(record.failure))
        lines.append("")
    return lines


def render_task_list(
    cluster_name: str, arns: list[str], records: Mapping[str, TaskRecord]
) -> list[str]:
    lines = [f"There are ({len(arns)}) tasks for cluster: {cluster_name}"]
    for i, arn in enumerate(arns, start=1):
        record = records.get(arn)
        if record is not None and record.task is not None:
            names = " ".join(record.task.container_names) or EMPTY
        else:
            names = "<no description>"
        lines.append(f"{i}: {names}")
        lines.append(f"\t{arn}.")
    return lines


def render_run_task_result(result: RunTaskResult) -> list[str]:
    lines = [f"There were ({len(result.failures)}) failures running the task."]
    for i, failure in enumerate(result.failures, start=1):
        lines.append(f"{i}: {render_failure(failure)[0]}")
    lines.append(f"There were ({len(result.tasks)}) tasks created.")
    for i, task in enumerate(result.tasks, start=1):
        task_lines = render_task(task)
        lines.append(f"{i}: {task_lines[0]}")
        lines.extend(task_lines[1:])
    return lines


# Task definitions


def render_task_definition_list(arns: list[str]) -> list[str]:
    lines = [f"There are ({len(arns)}) task definitions."]
    lines.extend(_enumerated(arns, suffix="."))
    return lines


def render_task_definition(task_definition: TaskDefinition) -> list[str]:
    lines = [
        f"Task Definition ARN: {_value(task_definition.arn)}",
        f"Family: {_value(task_definition.family)}",
        f"Revision: {_value(task_definition.revision)}",
        f"Status: {_value(task_definition.status)}",
        f"CPU: {_value(task_definition.cpu)}",
        f"Memory: {_value(task_definition.memory)}",
        f"Network Mode: {_value(task_definition.network_mode)}",
        f"There are ({len(task_definition.containers)}) container definitions.",
    ]
    for i, container in enumerate(task_definition.containers, start=1):
        lines.extend(
            [
                f"\t{i}. Name: {_value(container.name)}",
                f"\tImage: {_value(container.image)}",
                f"\tCPU: {_value(container.cpu)}",
                f"\tMemory: {_value(container.memory)}",
                f"\tEssential: {_value(container.essential)}",
                f"\tCommand: {' '.join(container.command) or EMPTY}",
                f"\tEntry Point: {' '.join(container.entry_point) or EMPTY}",
            ]
        )
        for mapping in container.port_mappings:
            lines.append(
                f"\t\tPort: {_value(mapping.container_port)} -> "
                f"{_value(mapping.host_port)} ({_value(mapping.protocol)})"
            )
        for name, value in container.environment.items():
            lines.append(f"\t\t{name}={value}")
    return lines


def render_template(template: dict[str, Any]) -> list[str]:
    return json.dumps(template, indent=2).splitlines()
