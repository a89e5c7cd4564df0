from shiurbank.application.use_cases.accounts.account_operations import AccountService

__all__ = ["AccountService"]
