"""
Unit tests for document access control.

Tests cover:
- Role classification (owner / collaborator / unauthorized)
- Owner-only and owner-or-collaborator gates
- Id comparison by value
"""
import uuid

import pytest

from app.core.exceptions import Forbidden
from app.domains.documents.entities import AccessRole, Document, DocumentAccess, as_uuid


OWNER = uuid.uuid4()
COLLABORATOR = uuid.uuid4()
STRANGER = uuid.uuid4()


@pytest.fixture
def document():
    return Document(uuid=uuid.uuid4(), name="Report", owner_id=OWNER, collaborators=[COLLABORATOR])


class TestRole:
    """Tests for role classification."""

    def test_owner(self, document):
        assert document.access().role(OWNER) is AccessRole.OWNER

    def test_collaborator(self, document):
        assert document.access().role(COLLABORATOR) is AccessRole.COLLABORATOR

    def test_stranger(self, document):
        assert document.access().role(STRANGER) is AccessRole.UNAUTHORIZED

    def test_ids_compared_by_value(self, document):
        """A string id and a fresh UUID object with the same value match."""
        access = document.access()
        assert access.role(str(OWNER)) is AccessRole.OWNER
        assert access.role(uuid.UUID(str(COLLABORATOR))) is AccessRole.COLLABORATOR

    def test_no_collaborators(self):
        access = DocumentAccess(uuid.uuid4(), OWNER)
        assert access.role(COLLABORATOR) is AccessRole.UNAUTHORIZED
        assert access.get_collaborators() == []


class TestRequireOwner:
    """require_owner succeeds iff caller is the owner."""

    def test_owner_passes(self, document):
        document.access().require_owner(OWNER)

    @pytest.mark.parametrize("caller", [COLLABORATOR, STRANGER])
    def test_others_forbidden(self, document, caller):
        with pytest.raises(Forbidden):
            document.access().require_owner(caller)


class TestRequireOwnerOrCollaborator:
    """require_owner_or_collaborator succeeds iff owner or collaborator."""

    @pytest.mark.parametrize("caller", [OWNER, COLLABORATOR])
    def test_privileged_pass(self, document, caller):
        document.access().require_owner_or_collaborator(caller)

    def test_stranger_forbidden(self, document):
        with pytest.raises(Forbidden) as exc_info:
            document.access().require_owner_or_collaborator(STRANGER)
        assert exc_info.value.kind == "Forbidden"
        assert exc_info.value.status_code == 403

    def test_decision_follows_membership_changes(self, document):
        """The gate is evaluated against the current collaborator list."""
        document.collaborators.append(STRANGER)
        document.access().require_owner_or_collaborator(STRANGER)


class TestDocumentEntity:

    def test_has_collaborator_by_value(self, document):
        assert document.has_collaborator(str(COLLABORATOR))
        assert not document.has_collaborator(STRANGER)

    def test_as_uuid_passthrough(self):
        value = uuid.uuid4()
        assert as_uuid(value) is value

    def test_as_uuid_rejects_garbage(self):
        with pytest.raises(ValueError):
            as_uuid("not-a-uuid")
