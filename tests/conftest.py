"""
Shared fixtures: an in-memory store that evaluates serialized queries
"""
import copy
import itertools

import pytest
from faunadb._json import parse_json, to_json
from faunadb.client import FaunaClient
from faunadb.errors import BadRequest, NotFound
from faunadb.objects import Native, Ref
from faunadb.request_result import RequestResult

from faunahelper import FaunaHelper


def http_error(error_class, status_code, code, description):
    """Build a driver error the way the client raises it for a response."""
    result = RequestResult(
        "POST", "", None, None, None,
        {"errors": [{"code": code, "description": description}]},
        status_code, {}, None, None,
    )
    return error_class(result)


def _not_found(description="Document not found."):
    return http_error(NotFound, 404, "instance not found", description)


def _key(ref):
    return (ref.collection().id(), ref.id())


def _merge(old, new):
    for key, value in new.items():
        if value is None:
            old.pop(key, None)
        elif isinstance(value, dict) and isinstance(old.get(key), dict):
            _merge(old[key], value)
        elif isinstance(value, dict):
            old[key] = {}
            _merge(old[key], value)
        else:
            old[key] = value


class FakeStore:
    """
    Minimal stand-in for the Fauna query endpoint.

    Requests go through the driver's JSON codec, so every query is
    checked in its wire form rather than as Python objects.
    """

    def __init__(self):
        self.documents = {}
        self.indexes = {}
        self.queries = []
        self._ids = itertools.count(1000)
        self._ts = itertools.count(1)

    def add_index(self, name, collection, field):
        self.indexes[name] = (collection, field)

    def query(self, expression, timeout_millis=None, tags=None, traceparent=None):
        wire = parse_json(to_json(expression))
        self.queries.append(wire)
        return copy.deepcopy(self._eval(wire, {}))

    # evaluation

    def _eval(self, expr, env):
        if isinstance(expr, list):
            return [self._eval(item, env) for item in expr]
        if not isinstance(expr, dict):
            return expr

        if "object" in expr:
            return {key: self._eval(value, env) for key, value in expr["object"].items()}
        if "map" in expr:
            return self._map(expr["map"], self._eval(expr["collection"], env), env)
        if "ref" in expr:
            return Ref(self._eval(expr["id"], env), self._eval(expr["ref"], env))
        if "create" in expr:
            return self._create(self._eval(expr["create"], env), self._eval(expr["params"], env))
        if "update" in expr:
            doc = self._lookup(self._eval(expr["update"], env))
            _merge(doc["data"], self._eval(expr["params"], env).get("data", {}))
            doc["ts"] = next(self._ts)
            return doc
        if "replace" in expr:
            doc = self._lookup(self._eval(expr["replace"], env))
            doc["data"] = self._eval(expr["params"], env).get("data", {})
            doc["ts"] = next(self._ts)
            return doc
        if "delete" in expr:
            ref = self._eval(expr["delete"], env)
            self._lookup(ref)
            return self.documents.pop(_key(ref))
        if "get" in expr:
            return self._get(self._eval(expr["get"], env))
        if "paginate" in expr:
            refs = self._eval(expr["paginate"], env)
            return {"data": refs[: expr.get("size", 64)]}
        if "match" in expr:
            index = self._eval(expr["match"], env)
            collection, field = self.indexes[index.id()]
            term = self._eval(expr.get("terms"), env)
            return [
                doc["ref"] for doc in self.documents.values()
                if doc["ref"].collection().id() == collection and doc["data"].get(field) == term
            ]
        if "documents" in expr:
            collection = self._eval(expr["documents"], env)
            return [doc["ref"] for doc in self.documents.values() if doc["ref"].collection() == collection]
        if "var" in expr:
            return env[expr["var"]]
        if "collection" in expr:
            return Ref(self._eval(expr["collection"], env), Native.COLLECTIONS)
        if "index" in expr:
            return Ref(self._eval(expr["index"], env), Native.INDEXES)
        raise http_error(BadRequest, 400, "invalid expression", f"Unknown expression: {expr!r}")

    def _map(self, lambda_, collection, env):
        def apply(item):
            return self._eval(lambda_["expr"], dict(env, **{lambda_["lambda"]: item}))

        if isinstance(collection, dict) and "data" in collection:
            return dict(collection, data=[apply(item) for item in collection["data"]])
        return [apply(item) for item in collection]

    def _lookup(self, ref):
        if _key(ref) not in self.documents:
            raise _not_found()
        return self.documents[_key(ref)]

    def _get(self, target):
        if isinstance(target, list):
            if not target:
                raise _not_found("Set not found.")
            target = target[0]
        return self._lookup(target)

    def _create(self, target, params):
        if target.collection() == Native.COLLECTIONS:
            ref = Ref(str(next(self._ids)), target)
        else:
            ref = target
            if _key(ref) in self.documents:
                raise http_error(BadRequest, 400, "instance already exists", "Document already exists.")
        doc = {"ref": ref, "ts": next(self._ts), "data": params.get("data", {})}
        self.documents[_key(ref)] = doc
        return doc


@pytest.fixture(autouse=True)
def no_version_check(monkeypatch):
    """Keep FaunaClient from contacting PyPI when it is constructed."""
    monkeypatch.setattr(FaunaClient, "check_new_version", lambda self: None)


@pytest.fixture
def store():
    """Create an empty fake store."""
    return FakeStore()


@pytest.fixture
def helper(store, monkeypatch):
    """Create a helper whose queries run against the fake store."""
    helper = FaunaHelper("test-secret")
    monkeypatch.setattr(helper, "_client", store)
    return helper
