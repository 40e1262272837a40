"""
FaunaHelper - Simplified document operations on top of the Fauna client
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from faunadb import query as q
from faunadb.client import FaunaClient

logger = logging.getLogger(__name__)


class FaunaHelper:
    """
    Helper for querying Fauna without writing FQL by hand.

    Every method builds one query expression and awaits its execution on
    the wrapped ``FaunaClient``. Errors raised by the client
    (``faunadb.errors.NotFound``, ``Unauthorized``, ...) propagate
    unchanged. Only use this in server-side code, since it holds a
    server secret.

    Args:
        secret: Fauna server key
        **client_options: Extra ``FaunaClient`` options (domain, port, timeout, ...)

    Raises:
        ValueError: If the secret is empty or not a string

    Example:
        >>> helper = FaunaHelper('fnAE...')
        >>> doc = await helper.create_document('users', {'name': 'Ann'})
        >>> await helper.get_by_ref('users', doc['ref'].id())
    """

    def __init__(self, secret: str, **client_options: Any):
        if not isinstance(secret, str) or not secret.strip():
            raise ValueError("A non-empty secret string is required")
        self._client = FaunaClient(secret=secret, **client_options)
        logger.info(f"Initialized FaunaHelper (domain={self._client.domain}, port={self._client.port})")

    @property
    def client(self) -> FaunaClient:
        """Underlying Fauna client."""
        return self._client

    async def query(self, expression: Any) -> Any:
        """
        Run any query expression in a worker thread and return its result.

        Args:
            expression: Expression built with ``faunadb.query``

        Returns:
            Decoded query result
        """
        return await asyncio.to_thread(self._client.query, expression)

    async def list_documents(self, collection_name: str, page_size: int = 10) -> List[Dict[str, Any]]:
        """
        Query the first page of documents from a collection.

        Args:
            collection_name: Collection to list
            page_size: Maximum number of documents (default: 10)

        Returns:
            List of full documents; later pages are not fetched
        """
        logger.debug(f"list_documents collection={collection_name} page_size={page_size}")
        page = await self.query(
            q.map_(
                q.lambda_("x", q.get(q.var("x"))),
                q.paginate(q.documents(q.collection(collection_name)), size=page_size),
            )
        )
        return page.get("data", [])

    async def get_by_ref(self, collection_name: str, ref_id: str) -> Dict[str, Any]:
        """
        Query a single document by its ref id.

        Raises:
            NotFound: If the document does not exist
        """
        logger.debug(f"get_by_ref collection={collection_name}")
        return await self.query(q.get(q.ref(q.collection(collection_name), ref_id)))

    async def get_by_index(self, index_name: str, value: Union[str, int, float, Any]) -> Dict[str, Any]:
        """
        Query a document through an index.

        When several documents match, the server returns the first one.

        Args:
            index_name: Index to search
            value: Term to match (string, number or query expression)

        Raises:
            NotFound: If nothing matches
        """
        logger.debug(f"get_by_index index={index_name}")
        return await self.query(q.get(q.match(q.index(index_name), value)))

    async def create_document(
        self,
        collection_name: str,
        data: Dict[str, Any],
        custom_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new document in a collection.

        Args:
            collection_name: Collection to insert into
            data: Document data; do not wrap it in a 'data' key
            custom_id: Optional id for the document, otherwise one is assigned

        Returns:
            Created document, including its ref
        """
        logger.debug(f"create_document collection={collection_name} custom_id={bool(custom_id)}")
        if custom_id:
            target = q.ref(q.collection(collection_name), custom_id)
        else:
            target = q.collection(collection_name)
        return await self.query(q.create(target, {"data": data}))

    async def create_multiple_documents(
        self,
        collection_name: str,
        data_list: Iterable[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """
        Create several documents in one request.

        Returns:
            Created documents, in the same order as ``data_list``
        """
        data_list = list(data_list)
        logger.debug(f"create_multiple_documents collection={collection_name} count={len(data_list)}")
        return await self.query(
            q.map_(
                q.lambda_("data", q.create(q.collection(collection_name), {"data": q.var("data")})),
                data_list,
            )
        )

    async def update_document(self, collection_name: str, ref_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update specific fields of a document.

        Fields that are not given keep their old values. Nested objects
        are merged with the stored ones, and a field set to None is
        removed.

        Raises:
            NotFound: If the document does not exist
        """
        logger.debug(f"update_document collection={collection_name}")
        return await self.query(q.update(q.ref(q.collection(collection_name), ref_id), {"data": data}))

    async def replace_document(self, collection_name: str, ref_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace a document's data; old fields not in ``data`` are removed.

        Raises:
            NotFound: If the document does not exist
        """
        logger.debug(f"replace_document collection={collection_name}")
        return await self.query(q.replace(q.ref(q.collection(collection_name), ref_id), {"data": data}))

    async def delete_document(self, collection_name: str, ref_id: str) -> Dict[str, Any]:
        """
        Remove a document by its ref id.

        Returns:
            The document as it was before deletion

        Raises:
            NotFound: If the document does not exist
        """
        logger.debug(f"delete_document collection={collection_name}")
        return await self.query(q.delete(q.ref(q.collection(collection_name), ref_id)))

    def __repr__(self) -> str:
        return f"FaunaHelper(domain='{self._client.domain}', port={self._client.port})"
