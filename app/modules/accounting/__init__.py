"""
Accounting module

- store.py: AccountingStore, the write-through snapshot of company, parties,
  invoices and ledger entries, with invoice/voucher sequencing
- aggregates.py: totals, balances, dashboard and ledger statement figures
- workflows.py: form operations spanning several store calls (invoice + Sales entry)
- exceptions.py: AccountingError and subclasses
- dependencies.py: FastAPI dependency returning the store from app.state
"""
