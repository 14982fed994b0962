"""Client library for the Portal HTTP DB.

Typical use::

    from portal_db_client import ClientConfig, new_db_client

    config = ClientConfig(base_url="https://db.example", api_key="...", version="v2", retries=3)
    with new_db_client(config) as db:
        chains = db.get_all_chains()
"""

from __future__ import annotations

from portal_db_client.client import (
    PortalDBClient,
    PortalDBReader,
    new_db_client,
    new_read_only_db_client,
)
from portal_db_client.config import (
    SUPPORTED_API_VERSIONS,
    APIVersion,
    ClientConfig,
    ClientSettings,
    load_config,
)
from portal_db_client.errors import (
    APIKeyNotProvidedError,
    APIVersionNotProvidedError,
    BaseURLNotProvidedError,
    CallTimeoutError,
    ConfigFileError,
    ConfigurationError,
    InputValidationError,
    InvalidPayloadError,
    InvalidRoleNameError,
    MissingParameterError,
    PortalDBError,
    ResponseDecodeError,
    ResponseNotOKError,
    UnsupportedAPIVersionError,
    parse_error_response,
)
from portal_db_client.headers import read_headers, write_headers
from portal_db_client.interfaces import DBClient, DBReader, DBWriter
from portal_db_client.logger import LogConfig, LogFormat, configure_logging, get_logger
from portal_db_client.models import (
    Account,
    AccountID,
    AccountIntegrations,
    BlockedAddress,
    BlockedContract,
    Chain,
    CreateAccountUserAccess,
    CreateUser,
    CreateUserResponse,
    GigastakeApp,
    GlobalBlockedContracts,
    NewChainInput,
    Plan,
    PortalApp,
    PortalAppID,
    PortalAppLite,
    ProviderUserID,
    RelayChainID,
    RoleName,
    UpdateAcceptAccountUser,
    UpdateAccount,
    UpdateAccountUserRole,
    UpdateChain,
    UpdateFirstDateSurpassed,
    UpdateGigastakeApp,
    UpdatePortalApp,
    UpdateRemoveAccountUser,
    User,
    UserID,
    UserPermissions,
)
from portal_db_client.options import AccountOptions, ChainOptions, PortalAppOptions
from portal_db_client.pipeline import create, execute, fetch, json_decoder, remove, replace
from portal_db_client.transport import HTTPClient, RetryingTransport, backoff_delay

__all__ = [
    # construction
    "ClientConfig",
    "ClientSettings",
    "load_config",
    "APIVersion",
    "SUPPORTED_API_VERSIONS",
    "new_db_client",
    "new_read_only_db_client",
    "DBReader",
    "DBWriter",
    "DBClient",
    "PortalDBReader",
    "PortalDBClient",
    # request core
    "HTTPClient",
    "RetryingTransport",
    "backoff_delay",
    "execute",
    "fetch",
    "create",
    "replace",
    "remove",
    "json_decoder",
    "read_headers",
    "write_headers",
    "parse_error_response",
    # logging
    "LogConfig",
    "LogFormat",
    "configure_logging",
    "get_logger",
    # options
    "ChainOptions",
    "PortalAppOptions",
    "AccountOptions",
    # errors
    "PortalDBError",
    "ConfigurationError",
    "BaseURLNotProvidedError",
    "APIKeyNotProvidedError",
    "APIVersionNotProvidedError",
    "UnsupportedAPIVersionError",
    "ConfigFileError",
    "CallTimeoutError",
    "ResponseNotOKError",
    "ResponseDecodeError",
    "InputValidationError",
    "MissingParameterError",
    "InvalidRoleNameError",
    "InvalidPayloadError",
    # models
    "RelayChainID",
    "PortalAppID",
    "AccountID",
    "UserID",
    "ProviderUserID",
    "BlockedAddress",
    "RoleName",
    "Chain",
    "GigastakeApp",
    "NewChainInput",
    "UpdateChain",
    "UpdateGigastakeApp",
    "PortalApp",
    "PortalAppLite",
    "UpdatePortalApp",
    "UpdateFirstDateSurpassed",
    "Plan",
    "Account",
    "UpdateAccount",
    "AccountIntegrations",
    "CreateAccountUserAccess",
    "UpdateAccountUserRole",
    "UpdateAcceptAccountUser",
    "UpdateRemoveAccountUser",
    "UserPermissions",
    "User",
    "CreateUser",
    "CreateUserResponse",
    "BlockedContract",
    "GlobalBlockedContracts",
]
