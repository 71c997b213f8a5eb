"""S3-backed home store for planned programs."""

import json
import os

import boto3
from botocore.exceptions import ClientError

from .errors import InvalidAccountError
from .settings import DEFAULT_REGION, Settings, find_profile
from .utils import log


def _session(profile: str | None = None) -> boto3.Session:
    """Static keys from the environment win over profiles."""
    access_key = os.getenv("AWS_ACCESS_KEY_ID")
    secret = os.getenv("AWS_SECRET_ACCESS_KEY")
    if access_key and secret:
        return boto3.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret,
            aws_session_token=os.getenv("AWS_SESSION_TOKEN"),
        )
    return boto3.Session(profile_name=find_profile(profile))


class AWSHome:
    """Stores JSON items under ``<project>/<stage>/`` in the account's bucket."""

    def __init__(
        self,
        region: str = DEFAULT_REGION,
        session: boto3.Session | None = None,
        profile: str | None = None,
    ):
        self.region = region
        session = session or _session(profile)
        self.s3 = session.client("s3", region_name=region)
        self.sts = session.client("sts", region_name=region)
        self._bucket: str | None = None

    def account_id(self) -> str:
        account = self.sts.get_caller_identity().get("Account")
        if not account:
            raise InvalidAccountError("STS returned no account id")
        return account

    def bucket_name(self) -> str:
        if self._bucket is None:
            self._bucket = f"vmplan-assets-{self.account_id()}"
        return self._bucket

    def bootstrap(self, settings: Settings) -> str:
        """Ensure the home bucket exists.

        :return: Bucket name
        """
        bucket = self.bucket_name()
        self._ensure_bucket_exists(bucket)
        log(f"Home bucket ready for '{settings.project}/{settings.stage}': '{bucket}'")
        return bucket

    def _ensure_bucket_exists(self, bucket: str) -> None:
        params = {"Bucket": bucket}
        if self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            self.s3.create_bucket(**params)
            log(f"Created bucket '{bucket}'")
        except ClientError as e:
            code = e.response["Error"]["Code"]
            if code == "BucketAlreadyOwnedByYou":
                log(f"Using existing bucket '{bucket}'")
            elif code == "PermanentRedirect":
                # bucket exists in another region
                location = self.s3.get_bucket_location(Bucket=bucket)
                bucket_region = location.get("LocationConstraint") or "us-east-1"
                if bucket_region == "EU":
                    bucket_region = "eu-west-1"
                log(f"Using existing bucket '{bucket}' in '{bucket_region}'")
            else:
                raise

    def put_item(self, item, file_name: str, settings: Settings) -> str:
        """Store ``item`` as JSON.

        :return: Object key written
        """
        key = settings.item_key(file_name)
        self.s3.put_object(
            Bucket=self.bucket_name(),
            Key=key,
            Body=json.dumps(item, indent=2).encode("utf8"),
            ContentType="application/json",
        )
        log(f"Saved '{key}'")
        return key

    def get_item(self, file_name: str, settings: Settings):
        response = self.s3.get_object(
            Bucket=self.bucket_name(), Key=settings.item_key(file_name)
        )
        return json.loads(response["Body"].read())
