"""Project settings from environment variables and ``.env``."""

import configparser
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .utils import log

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class Settings:
    project: str = "vmplan"
    stage: str = "dev"
    region: str = DEFAULT_REGION
    aws_profile: str | None = None

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Read VMPLAN_PROJECT, VMPLAN_STAGE, AWS_REGION and AWS_PROFILE.

        Keyword overrides that are not None win over the environment.
        """
        load_dotenv(find_dotenv(usecwd=True))
        values = {
            "project": os.getenv("VMPLAN_PROJECT", "vmplan"),
            "stage": os.getenv("VMPLAN_STAGE", "dev"),
            "region": os.getenv("AWS_REGION", DEFAULT_REGION),
            "aws_profile": os.getenv("AWS_PROFILE"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def item_key(self, file_name: str) -> str:
        """Object key of ``file_name`` for this project and stage."""
        return f"{self.project}/{self.stage}/{file_name}"


def find_profile(profile: str | None = None) -> str | None:
    """Name of the AWS profile to open a session with.

    :param profile: Explicit AWS profile name (overrides AWS_PROFILE env var)
    :return: A profile listed in ~/.aws/credentials or ~/.aws/config, or None
        to fall back to the default credential chain
    """
    available_profiles = set()
    for path in ["~/.aws/credentials", "~/.aws/config"]:
        cfg = configparser.ConfigParser()
        cfg.read(os.path.expanduser(path))
        for section in cfg.sections():
            available_profiles.add(section.removeprefix("profile "))

    profile_name = profile or os.getenv("AWS_PROFILE")
    if not profile_name and "default" in available_profiles:
        return "default"
    if profile_name and profile_name not in available_profiles:
        log(f"AWS profile '{profile_name}' not found, using default credential chain...")
        return None
    return profile_name
