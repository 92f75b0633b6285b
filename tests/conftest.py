"""
Shared fixtures: an in-memory WorkSphere organization and the wired service.
"""
from contextlib import nullcontext

import pytest

from worksphere_assistant.api import create_app
from worksphere_assistant.config import AssistantConfig
from worksphere_assistant.exceptions import GatewayError
from worksphere_assistant.gateway import InMemoryGateway
from worksphere_assistant.service import AssistantService


class FailingGateway(InMemoryGateway):
    """Resolves users, fails every other read."""

    def fetch(self, query):
        if query.table == "users":
            return super().fetch(query)
        raise GatewayError(f"'{query.table}' query failed with HTTP 503")

    def count(self, query):
        raise GatewayError(f"'{query.table}' count failed with HTTP 503")


def seed_users():
    return [
        {"id": "u1", "full_name": "Ana Employee", "organization_id": "o1",
         "department_id": "d1", "role": "employee"},
        {"id": "u2", "full_name": "Ben Manager", "organization_id": "o1",
         "department_id": "d1", "role": "manager"},
        {"id": "u3", "full_name": "Cleo Ceo", "organization_id": "o1",
         "department_id": "d2", "role": "ceo"},
        {"id": "u4", "full_name": "Dev Newhire", "organization_id": "o2",
         "department_id": None, "role": "employee"},
    ]


def seed_tasks():
    return [
        {"id": "t1", "title": "Ship quarterly report", "priority": "high",
         "status": "in_progress", "due_date": "2020-01-15T09:00:00Z",
         "assigned_to": "u1", "assigned_by_user": {"full_name": "Ben Manager"}},
        {"id": "t2", "title": "Update onboarding docs", "priority": "medium",
         "status": "todo", "due_date": "2099-03-01T09:00:00Z", "assigned_to": "u1"},
        {"id": "t3", "title": "Plan offsite", "priority": "low",
         "status": "todo", "due_date": "2099-06-30T09:00:00Z", "assigned_to": "u1"},
        {"id": "t4", "title": "Old cleanup", "priority": "low",
         "status": "completed", "due_date": "2019-01-01T09:00:00Z", "assigned_to": "u1"},
        {"id": "t5", "title": "Someone else's task", "priority": "high",
         "status": "todo", "due_date": None, "assigned_to": "u2"},
    ]


@pytest.fixture
def config():
    return AssistantConfig(
        supabase_url="https://test.supabase.co",
        supabase_service_key="service-role-key-for-tests",
        rate_limit_enabled=False,
    )


@pytest.fixture
def gateway():
    return InMemoryGateway({
        "users": seed_users(),
        "tasks": seed_tasks(),
    })


@pytest.fixture
def failing_gateway():
    return FailingGateway({"users": seed_users()})


@pytest.fixture
def service(config, gateway):
    return AssistantService(config, lambda: nullcontext(gateway))


@pytest.fixture
def client(config, service):
    app = create_app(config, service=service)
    app.testing = True
    return app.test_client()
