"""
Order lifecycle module.

Order models, the lifecycle state machine, the order book and the manager
that opens and closes orders through the transport:
PROPOSED → PENDING → EXECUTED → CLOSING → CLOSED, with REJECTED and the
CLOSING → EXECUTED rollback as failure exits.
"""
