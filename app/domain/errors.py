from __future__ import annotations

class NotFoundError(Exception):
    def __init__(self, what: str = "Resource"):
        super().__init__(what)
        self.what = what

class BadRequestError(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class UnknownFieldError(BadRequestError):
    """Filter or sort key with no entry in the resolver table."""
    def __init__(self, field: str, kind: str = "filter"):
        super().__init__(f"Unknown {kind} field '{field}'")
        self.field = field
        self.kind = kind

class MalformedDocumentError(Exception):
    """A document returned by the search engine lacks a required field or holds a wrong-typed one."""
    def __init__(self, field: str, doc_id: str | None = None, problem: str = "missing"):
        where = f" in document {doc_id}" if doc_id else ""
        super().__init__(f"Field '{field}' {problem}{where}")
        self.field = field
        self.doc_id = doc_id
        self.detail = str(self)

class TransportError(Exception):
    """Call to a backing service (search engine, workflow management) failed."""
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
