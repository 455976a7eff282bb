"""Application entry point and composition root."""

import argparse
import asyncio
import logging

import uvicorn
from falcon.asgi import App

from schoolauthz import __version__
from schoolauthz.application.use_cases.audit.get_permission_audit import GetPermissionAuditUseCase
from schoolauthz.application.use_cases.check.check_permissions import CheckPermissionsUseCase
from schoolauthz.application.use_cases.override.add_permission_override import (
    AddPermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.override.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from schoolauthz.application.use_cases.override.remove_permission_override import (
    RemovePermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.role_permission.add_role_permission import (
    AddRolePermissionUseCase,
)
from schoolauthz.application.use_cases.role_permission.bulk_apply_permissions import (
    BulkApplyPermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.bulk_copy_permissions import (
    BulkCopyPermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.get_role_permissions import (
    GetRolePermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from schoolauthz.application.use_cases.role_permission.seed_role_permissions import (
    SeedRolePermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.update_role_permission_scope import (
    UpdateRolePermissionScopeUseCase,
)
from schoolauthz.config import Settings, get_settings
from schoolauthz.domain.catalog import parse_role
from schoolauthz.infrastructure.auth.keycloak_provider import KeycloakProvider
from schoolauthz.infrastructure.cache.effective_cache import EffectivePermissionCache
from schoolauthz.infrastructure.permission.permission_checker import SchoolPermissionChecker
from schoolauthz.infrastructure.persistence.postgres.connection import create_pool
from schoolauthz.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from schoolauthz.interfaces.api.app import create_app
from schoolauthz.interfaces.api.middleware.auth import AuthMiddleware
from schoolauthz.interfaces.api.middleware.cors import CORSMiddleware
from schoolauthz.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from schoolauthz.interfaces.api.resources.audit import PermissionAuditResource
from schoolauthz.interfaces.api.resources.health import HealthResource
from schoolauthz.interfaces.api.resources.permission_checks import (
    PermissionCheckBatchResource,
    PermissionCheckResource,
)
from schoolauthz.interfaces.api.resources.role_permissions import (
    RolePermissionResource,
    RolePermissionsBulkResource,
    RolePermissionsCopyResource,
    RolePermissionsResource,
)
from schoolauthz.interfaces.api.resources.user_permissions import (
    UserPermissionOverrideResource,
    UserPermissionsResource,
)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_schoolauthz_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("No Keycloak client secret configured; every request will be rejected")

    cache = EffectivePermissionCache(ttl_seconds=settings.permission_cache_ttl_seconds)
    permission_checker = SchoolPermissionChecker(
        uow_factory,
        cache=cache,
        bootstrap_roles=settings.bootstrap_roles,
    )

    role_permissions_resource = RolePermissionsResource(
        GetRolePermissionsUseCase(uow_factory, permission_checker),
        AddRolePermissionUseCase(uow_factory, permission_checker, cache),
    )
    role_permission_resource = RolePermissionResource(
        UpdateRolePermissionScopeUseCase(uow_factory, permission_checker, cache),
        RemoveRolePermissionUseCase(uow_factory, permission_checker, cache),
    )
    copy_resource = RolePermissionsCopyResource(
        BulkCopyPermissionsUseCase(uow_factory, permission_checker, cache)
    )
    bulk_resource = RolePermissionsBulkResource(
        BulkApplyPermissionsUseCase(uow_factory, permission_checker, cache)
    )
    user_permissions_resource = UserPermissionsResource(
        GetUserPermissionsUseCase(uow_factory, permission_checker),
        AddPermissionOverrideUseCase(uow_factory, permission_checker, cache),
    )
    user_override_resource = UserPermissionOverrideResource(
        RemovePermissionOverrideUseCase(uow_factory, permission_checker, cache)
    )
    check_permissions = CheckPermissionsUseCase(permission_checker)
    audit_resource = PermissionAuditResource(
        GetPermissionAuditUseCase(uow_factory, permission_checker)
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        role_permissions_resource=role_permissions_resource,
        role_permission_resource=role_permission_resource,
        role_permissions_copy_resource=copy_resource,
        role_permissions_bulk_resource=bulk_resource,
        user_permissions_resource=user_permissions_resource,
        user_override_resource=user_override_resource,
        check_resource=PermissionCheckResource(check_permissions),
        check_batch_resource=PermissionCheckBatchResource(check_permissions),
        audit_resource=audit_resource,
        health_resource=HealthResource(pool),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, cache),
            AuthMiddleware(keycloak),
        ],
    )


async def seed(settings: Settings, role_names: list[str] | None = None) -> None:
    """Insert the default role baseline; existing rows are left untouched."""
    roles = [parse_role(name) for name in role_names] if role_names else None
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    await pool.open()
    try:
        use_case = SeedRolePermissionsUseCase(create_uow_factory(pool))
        result = await use_case.execute(roles=roles)
    finally:
        await pool.close()
    logger.info(
        "Seeded %d permissions across %d roles (%d already present)",
        result.added,
        len(result.roles),
        result.skipped,
    )


def run_server(settings: Settings) -> None:
    """Run uvicorn server."""
    app = create_schoolauthz_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="schoolauthz", description="School staff authorization service")
    parser.add_argument("--version", action="version", version=f"schoolauthz v{__version__}")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", help="Run the HTTP API")
    seed_parser = sub.add_parser("seed", help="Insert the default role permissions")
    seed_parser.add_argument("roles", nargs="*", help="Roles to seed (default: all)")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    if args.command == "serve":
        run_server(settings)
    elif args.command == "seed":
        asyncio.run(seed(settings, args.roles))
