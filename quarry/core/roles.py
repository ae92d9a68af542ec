"""
Role resolution and module access rules.

A role is membership in one of the Django auth groups below. Users that are
superuser/staff but in no role group fall back to director access, the same
way group membership takes priority over staff flags elsewhere.
"""
from rest_framework.permissions import BasePermission

DIRECTOR = 'director'
MANAGER = 'manager'
CRUSHER_MANAGER = 'crusher_manager'
CONTRACTOR = 'contractor'
SALES = 'sales'

ROLE_GROUPS = {
    'Director': DIRECTOR,
    'Manager': MANAGER,
    'CrusherManager': CRUSHER_MANAGER,
    'Contractor': CONTRACTOR,
    'Sales': SALES,
}
GROUP_FOR_ROLE = {role: group for group, role in ROLE_GROUPS.items()}

# Checked in this order when a user is in several groups
ROLE_PRIORITY = [DIRECTOR, MANAGER, CRUSHER_MANAGER, SALES, CONTRACTOR]

REVIEWER_ROLES = {DIRECTOR, MANAGER}

_SITE_OPERATIONS = {CONTRACTOR, MANAGER}

# Directors can access every module, so they are not listed
MODULE_ROLES = {
    'drilling': _SITE_OPERATIONS,
    'blasting': _SITE_OPERATIONS,
    'loading': _SITE_OPERATIONS,
    'transport': _SITE_OPERATIONS,
    'jcb_operations': _SITE_OPERATIONS,
    'attendance': _SITE_OPERATIONS,
    'media': _SITE_OPERATIONS,
    'inventory': _SITE_OPERATIONS,
    'fuel': _SITE_OPERATIONS,
    'safety': _SITE_OPERATIONS,
    'crusher_production': {CRUSHER_MANAGER, MANAGER},
    'eb_reports': {CRUSHER_MANAGER, MANAGER},
    'sales': {SALES, MANAGER},
    'customers': {SALES, MANAGER},
    'approvals': {MANAGER},
    'reports': {MANAGER},
    'permits': set(),
    'accounts': set(),
    'dispatch': set(),
    'stock': set(),
    'users': set(),
    'settings': set(),
}


def get_user_role(user):
    """Return the role slug for a user, or None if it has no role"""
    if not user or not user.is_authenticated:
        return None
    group_names = set(user.groups.values_list('name', flat=True))
    roles = {ROLE_GROUPS[name] for name in group_names if name in ROLE_GROUPS}
    for role in ROLE_PRIORITY:
        if role in roles:
            return role
    if user.is_superuser or user.is_staff:
        return DIRECTOR
    return None


def can_access_module(user, module):
    role = get_user_role(user)
    if role is None:
        return False
    if role == DIRECTOR:
        return True
    return role in MODULE_ROLES.get(module, set())


def is_reviewer(user):
    return get_user_role(user) in REVIEWER_ROLES


def module_access(user):
    """Map of module name -> bool for building client navigation"""
    return {module: can_access_module(user, module) for module in MODULE_ROLES}


def scope_to_user(queryset, user, owner_field='created_by'):
    """Reviewers see every row; everyone else only the rows they created"""
    if is_reviewer(user):
        return queryset
    return queryset.filter(**{owner_field: user})


_permission_cache = {}


def ModuleAccess(module):
    """Build a DRF permission class that checks access to one module"""
    if module not in MODULE_ROLES:
        raise KeyError(f"Unknown module: {module}")
    if module not in _permission_cache:
        class _ModuleAccess(BasePermission):
            message = f'Your role does not have access to {module.replace("_", " ")}.'

            def has_permission(self, request, view):
                return can_access_module(request.user, module)

        _ModuleAccess.__name__ = f'ModuleAccess_{module}'
        _permission_cache[module] = _ModuleAccess
    return _permission_cache[module]


class IsReviewer(BasePermission):
    """Directors and managers"""
    message = 'Only managers and directors can perform this action.'

    def has_permission(self, request, view):
        return is_reviewer(request.user)
