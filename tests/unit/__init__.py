"""Unit tests.

One layer at a time: the token factory ledger without a chain, the
dispatcher with fake applications and a recording router, the bank over a
bare `InMemoryStorage`. No database and no files, except where a helper's
job is to write one (logging).
"""
