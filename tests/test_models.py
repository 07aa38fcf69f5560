"""Tests for view models and describe-response merging."""

from dataclasses import asdict

from ecs_pilot.models import (
    Cluster,
    ContainerInstance,
    ContainerInstanceRecord,
    Failure,
    RunTaskResult,
    Task,
    TaskDefinition,
    container_instance_records,
    merge_described,
    task_records,
)


def make_record(arn, item, failure=None):
    return ContainerInstanceRecord(arn=arn, instance=item, failure=failure)


class TestMergeDescribed:
    """Tests for merge_described."""

    def test_keys_are_union_of_successes_and_failures(self):
        """Test that every identifier from either list gets a record."""
        items = [ContainerInstance(arn="a"), ContainerInstance(arn="b")]
        failures = [Failure(arn="b", reason="STALE"), Failure(arn="c", reason="MISSING")]

        records = merge_described(items, failures, lambda ci: ci.arn, make_record)

        assert set(records) == {"a", "b", "c"}
        for record in records.values():
            assert record.instance is not None or record.failure is not None

    def test_failure_attached_to_described_item(self):
        """Test that a failure for a described item is attached to it."""
        items = [ContainerInstance(arn="b")]
        failures = [Failure(arn="b", reason="STALE")]

        records = merge_described(items, failures, lambda ci: ci.arn, make_record)

        assert records["b"].instance.arn == "b"
        assert records["b"].failure.reason == "STALE"

    def test_failure_only_record(self):
        """Test that an undescribed failure becomes a failure-only record."""
        records = merge_described(
            [], [Failure(arn="c", reason="MISSING")], lambda ci: ci.arn, make_record
        )

        assert records["c"].instance is None
        assert records["c"].failure.reason == "MISSING"

    def test_successes_precede_failure_only_records(self):
        """Test record ordering."""
        items = [ContainerInstance(arn="b"), ContainerInstance(arn="a")]
        failures = [Failure(arn="z"), Failure(arn="a")]

        records = merge_described(items, failures, lambda ci: ci.arn, make_record)

        assert list(records) == ["b", "a", "z"]

    def test_empty_inputs(self):
        """Test that no input yields an empty mapping."""
        assert merge_described([], [], lambda ci: ci.arn, make_record) == {}

    def test_idempotent(self):
        """Test that merging the same response twice gives equal results."""
        response = {
            "containerInstances": [{"containerInstanceArn": "a"}],
            "failures": [{"arn": "a", "reason": "STALE"}, {"arn": "b"}],
        }
        assert container_instance_records(response) == container_instance_records(
            response
        )


class TestContainerInstanceRecords:
    """Tests for container_instance_records."""

    def test_from_describe_response(self):
        """Test building records from a DescribeContainerInstances response."""
        response = {
            "containerInstances": [
                {
                    "containerInstanceArn": "arn:ci/1",
                    "ec2InstanceId": "i-111",
                    "status": "ACTIVE",
                    "runningTasksCount": 2,
                    "pendingTasksCount": 0,
                    "agentConnected": True,
                    "registeredResources": [
                        {"name": "CPU", "type": "INTEGER", "integerValue": 2048},
                        {"name": "PORTS", "type": "STRINGSET", "stringSetValue": ["22", "80"]},
                    ],
                    "attributes": [{"name": "ecs.os-type", "value": "linux"}, {"name": "flag"}],
                }
            ],
            "failures": [{"arn": "arn:ci/2", "reason": "MISSING"}],
        }

        records = container_instance_records(response)

        instance = records["arn:ci/1"].instance
        assert instance.ec2_instance_id == "i-111"
        assert instance.registered_resources[0].value == 2048
        assert instance.registered_resources[1].value == "22, 80"
        assert instance.attributes[1].value is None
        assert records["arn:ci/2"].failure.reason == "MISSING"


class TestTaskRecords:
    """Tests for task_records and task models."""

    def test_from_describe_response(self):
        """Test building task records with containers and bindings."""
        response = {
            "tasks": [
                {
                    "taskArn": "arn:task/1",
                    "clusterArn": "arn:cluster/prod",
                    "lastStatus": "RUNNING",
                    "containers": [
                        {
                            "name": "web",
                            "containerArn": "arn:container/1",
                            "exitCode": 0,
                            "networkBindings": [
                                {
                                    "bindIP": "0.0.0.0",
                                    "containerPort": 80,
                                    "hostPort": 8080,
                                    "protocol": "tcp",
                                }
                            ],
                        }
                    ],
                }
            ],
            "failures": [],
        }

        records = task_records(response)

        task = records["arn:task/1"].task
        assert task.container_names == ["web"]
        assert task.containers[0].exit_code == 0
        assert task.containers[0].network_bindings[0].host_port == 8080
        assert records["arn:task/1"].failure is None

    def test_run_task_result(self):
        """Test parsing a RunTask response."""
        result = RunTaskResult.from_api(
            {
                "tasks": [{"taskArn": "arn:task/1"}],
                "failures": [{"arn": "arn:ci/1", "reason": "RESOURCE:MEMORY"}],
            }
        )

        assert [t.arn for t in result.tasks] == ["arn:task/1"]
        assert result.failures[0].reason == "RESOURCE:MEMORY"


class TestOtherModels:
    """Tests for cluster and task definition models."""

    def test_cluster_from_api(self):
        """Test parsing a DescribeClusters entry."""
        cluster = Cluster.from_api(
            {
                "clusterArn": "arn:aws:ecs:us-east-1:123:cluster/prod",
                "clusterName": "prod",
                "status": "ACTIVE",
                "registeredContainerInstancesCount": 3,
                "runningTasksCount": 4,
                "pendingTasksCount": 1,
                "activeServicesCount": 2,
            }
        )

        assert cluster.name == "prod"
        assert cluster.registered_container_instances_count == 3

    def test_cluster_from_arn_has_no_details(self):
        """Test that list results only carry the ARN."""
        cluster = Cluster.from_arn("arn:cluster/prod")
        assert cluster.status is None
        assert cluster.running_tasks_count is None

    def test_task_definition_from_api(self):
        """Test parsing a task definition with container details."""
        task_definition = TaskDefinition.from_api(
            {
                "taskDefinitionArn": "arn:aws:ecs:us-east-1:123:task-definition/web:3",
                "family": "web",
                "revision": 3,
                "containerDefinitions": [
                    {
                        "name": "web",
                        "image": "nginx",
                        "portMappings": [{"containerPort": 80, "hostPort": 0}],
                        "environment": [{"name": "MODE", "value": "prod"}],
                    }
                ],
            }
        )

        container = task_definition.containers[0]
        assert task_definition.revision == 3
        assert container.port_mappings[0].container_port == 80
        assert container.environment == {"MODE": "prod"}

    def test_models_are_serializable(self):
        """Test that view models convert to plain dictionaries."""
        task = Task.from_api({"taskArn": "arn:task/1", "containers": [{"name": "web"}]})

        data = asdict(task)

        assert data["arn"] == "arn:task/1"
        assert data["containers"][0]["name"] == "web"
