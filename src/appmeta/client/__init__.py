"""AppMeta Python SDK — Client library for the AppMeta API.

Quick start::

    from appmeta.client import AppMetaClient

    client = AppMetaClient("http://localhost:8080")
    client.add_metadata(open("app.yaml").read())
    client.lookup(title="app title", company="smallcorp")
"""

from appmeta.client.client import AppMetaClient, AsyncAppMetaClient

__all__ = ["AppMetaClient", "AsyncAppMetaClient"]
