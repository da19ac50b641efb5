"""
Table validation and JSON (de)serialization.

Import ``dfsm.persistence.serializer`` directly; it depends on the core package,
which itself imports the validator from here.
"""
