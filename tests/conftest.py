"""Shared fixtures: a fresh in-memory scope and a stubbed home store."""

import boto3
import pytest

from vmplan.home import AWSHome
from vmplan.scope import MemoryScope


@pytest.fixture
def scope():
    return MemoryScope(project="test")


@pytest.fixture
def boto_session():
    return boto3.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
    )


@pytest.fixture
def home(boto_session):
    return AWSHome("us-east-1", session=boto_session)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate from the caller's .env and VMPLAN_/AWS_ variables."""
    monkeypatch.chdir(tmp_path)
    for var in ["VMPLAN_PROJECT", "VMPLAN_STAGE", "AWS_REGION", "AWS_PROFILE"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path
