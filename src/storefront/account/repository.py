"""Repository for the Account aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.account.account import Account
from storefront.domain import storefront
from storefront.shared.errors import AccountNotFound

PAGE_SIZE = 100


@storefront.repository(part_of=Account)
class AccountRepository:
    def get_account(self, account_id) -> Account:
        try:
            return self.get(str(account_id))
        except ObjectNotFoundError:
            raise AccountNotFound(str(account_id)) from None

    def find_by_email(self, email: str) -> Account | None:
        return self._dao.query.filter(email=email).all().first

    def list_all(self, role: str | None = None) -> list[Account]:
        query = self._dao.query.order_by("created_at")
        if role:
            query = query.filter(role=role)

        accounts = []
        while True:
            page = query.offset(len(accounts)).limit(PAGE_SIZE).all()
            accounts.extend(page.items)
            if not page.items or len(accounts) >= page.total:
                return accounts
