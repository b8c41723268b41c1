"""
Contracts (data models).

Request/response shapes shared by the mock and real checkout processor
clients, plus the validation helpers that turn client payloads into them.
Flows rely on these models rather than on ad-hoc dicts.
"""
