"""
explorerd: query and admission API of a Sia explorer node.

Exposes peer synchronization, transaction-pool admission, chain state and
historical element indexing behind one authenticated HTTP API, and composes
element search, batch address queries and dependency-ordered transaction
broadcast.
"""

__version__ = "0.1.0"
