"""
Domain operations of the school portal.

Each operation takes the acting principal explicitly, asks the access policy
for a decision, and reads or writes the store inside one transaction.
"""
