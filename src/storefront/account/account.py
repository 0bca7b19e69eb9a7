"""Account aggregate: a back-office view of who can use the storefront.

The order ledger never consults accounts; it records whatever identity the
caller hands it. Accounts exist so administrators can list customers,
deactivate them and change their role.
"""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront


class Role(Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"
    SUPPORT = "support"
    EMPLOYEE = "employee"
    CUSTOMER = "customer"


def normalize_email(email: str) -> str:
    """Lower-case and validate the basic shape of an email address."""
    email = (email or "").strip().lower()

    if " " in email or email.count("@") != 1:
        raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    local_part, domain_part = email.split("@", 1)
    if not local_part or not domain_part or "." not in domain_part:
        raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
    if domain_part.startswith(".") or domain_part.endswith(".") or ".." in email:
        raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    return email


@storefront.aggregate
class Account:
    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, name, email, role=None):
        from storefront.account.events import AccountRegistered

        now = datetime.now()
        account = cls(
            name=name,
            email=normalize_email(email),
            role=role or Role.CUSTOMER.value,
            is_active=True,
            created_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=account.id,
                name=account.name,
                email=account.email,
                role=account.role,
                registered_at=now,
            )
        )
        return account

    def toggle_status(self):
        from storefront.account.events import AccountStatusToggled

        self.is_active = not self.is_active
        self.raise_(
            AccountStatusToggled(
                account_id=self.id,
                is_active=self.is_active,
                toggled_at=datetime.now(),
            )
        )

    def change_role(self, role):
        from storefront.account.events import AccountRoleChanged

        if role not in {r.value for r in Role}:
            raise ValidationError({"role": [f"Unknown role '{role}'"]})

        previous = self.role
        self.role = role
        self.raise_(
            AccountRoleChanged(
                account_id=self.id,
                previous_role=previous,
                new_role=role,
                changed_at=datetime.now(),
            )
        )
