"""Account administration: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.account import Account, normalize_email
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Account")
class RegisterAccount:
    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    role: String(max_length=20)


@storefront.command(part_of="Account")
class ToggleAccountStatus:
    account_id: Identifier(required=True)


@storefront.command(part_of="Account")
class ChangeAccountRole:
    account_id: Identifier(required=True)
    role: String(required=True, max_length=20)


@storefront.command_handler(part_of=Account)
class AccountAdminHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        if repo.find_by_email(normalize_email(command.email)):
            raise ValidationError({"email": ["An account with this email already exists"]})

        account = Account.register(name=command.name, email=command.email, role=command.role)
        repo.add(account)
        logger.info("Account registered", account_id=str(account.id), role=account.role)
        return str(account.id)

    @handle(ToggleAccountStatus)
    def toggle_status(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get_account(command.account_id)
        account.toggle_status()
        repo.add(account)
        logger.info("Account status toggled", account_id=str(account.id), is_active=account.is_active)

    @handle(ChangeAccountRole)
    def change_role(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get_account(command.account_id)
        account.change_role(command.role)
        repo.add(account)
        logger.info("Account role changed", account_id=str(account.id), role=account.role)
