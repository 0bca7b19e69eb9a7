"""Domain events for the Account aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Account")
class AccountRegistered:
    __version__ = 1

    account_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AccountStatusToggled:
    __version__ = 1

    account_id: Identifier(required=True)
    is_active: Boolean(required=True)
    toggled_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AccountRoleChanged:
    __version__ = 1

    account_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
    changed_at: DateTime(required=True)
