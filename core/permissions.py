"""
Centralized module and permission definitions.
All module and permission names should be referenced from here.
"""
from enum import Enum


class Module(str, Enum):
    ORG_SETTINGS = "ORG_SETTINGS"
    PAYROLL = "PAYROLL"
    EMPLOYEES = "EMPLOYEES"
    HELB = "HELB"
    AUDIT_LOGS = "AUDIT_LOGS"


class ModulePermission(str, Enum):
    READ = "can_read"
    WRITE = "can_write"
    DELETE = "can_delete"
    APPROVE = "can_approve"


ALL_PERMISSIONS = [p.value for p in ModulePermission]


def _flags(*granted: ModulePermission) -> dict:
    return {p.value: p in granted for p in ModulePermission}


_FULL = _flags(*ModulePermission)
_MANAGE = _flags(ModulePermission.READ, ModulePermission.WRITE, ModulePermission.APPROVE)
_READ_ONLY = _flags(ModulePermission.READ)

# Default permission matrix, keyed by workspace role then module.
# Seeded once at startup; maintained externally afterwards.
DEFAULT_ROLE_MODULE_PERMISSIONS = {
    "OWNER": {module: _FULL for module in Module},
    "ADMIN": {module: _FULL for module in Module},
    "MANAGER": {module: _MANAGE for module in Module},
    "MEMBER": {
        Module.PAYROLL: _READ_ONLY,
        Module.EMPLOYEES: _READ_ONLY,
        Module.HELB: _READ_ONLY,
    },
    "VIEWER": {
        Module.ORG_SETTINGS: _READ_ONLY,
        Module.AUDIT_LOGS: _READ_ONLY,
    },
}
