"""Dependency wiring helpers."""

from fastapi import FastAPI

from .auth.auth_api import router as auth_router
from .auth.auth_service import AuthService
from .config import AppConfig
from .configurations.configurations_api import router as configurations_router
from .configurations.configurations_repository import ConfigurationRepository
from .configurations.configurations_service import ConfigurationService
from .discovery.discovery_api import router as discovery_router
from .discovery.discovery_service import CapabilityDiscoveryService
from .endpoints.endpoints_api import router as endpoints_router
from .endpoints.endpoints_registry import EndpointRegistry
from .infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from .org.org_client import OrgClient
from .schema.namespace import NamespaceNormalizer
from .schema.schema_api import router as schema_router
from .schema.schema_describe import ConfigurationObjectDescriber
from .sources.sources_api import router as sources_router
from .sources.sources_service import DataSourceBrowser


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    normalizer = NamespaceNormalizer(config.namespace)

    # The test endpoint is only offered while running in the test environment.
    hidden = () if config.is_test_environment else (config.test_endpoint_name,)
    endpoint_registry = EndpointRegistry.from_file(
        config.endpoints_path,
        hidden_names=hidden,
        default_api_version=config.org.api_version,
    )
    org_client = OrgClient.from_settings(config.org)
    discovery_service = CapabilityDiscoveryService(
        endpoints=endpoint_registry,
        org=org_client,
        timeout_seconds=config.org.timeout_seconds,
    )
    source_browser = DataSourceBrowser(org=org_client, discovery=discovery_service)

    configuration_repo = ConfigurationRepository(config.session_factory)
    configuration_service = ConfigurationService(
        repo=configuration_repo,
        unit_of_work_factory=lambda: SqlAlchemyUnitOfWork(config.session_factory),
        normalizer=normalizer,
    )
    auth_service = AuthService.from_file(
        path=config.admin_credentials_path,
        signing_key=config.jwt_signing_key,
        token_ttl_hours=config.admin_jwt_ttl_hours,
    )

    app.state.config = config
    app.state.auth_service = auth_service
    app.state.endpoint_registry = endpoint_registry
    app.state.discovery_service = discovery_service
    app.state.source_browser = source_browser
    app.state.configuration_describer = ConfigurationObjectDescriber(normalizer)
    app.state.configuration_service = configuration_service

    app.include_router(auth_router)
    app.include_router(endpoints_router)
    app.include_router(discovery_router)
    app.include_router(sources_router)
    app.include_router(schema_router)
    app.include_router(configurations_router)
