from pathlib import Path

from contract_analysis.config.settings import Settings
from contract_analysis.storage.base import BaseObjectStore
from contract_analysis.storage.local_adapter import LocalObjectStore
from contract_analysis.storage.s3_adapter import S3ObjectStore


class ObjectStoreFactory:
    """Creates the configured object storage adapter."""

    PROVIDERS = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        provider = settings.storage_provider.lower()
        if provider == "s3":
            return S3ObjectStore(
                region_name=settings.aws_region,
                endpoint_url=settings.aws_endpoint_url,
            )
        if provider == "local":
            return LocalObjectStore(root=Path(settings.storage_local_root))
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
