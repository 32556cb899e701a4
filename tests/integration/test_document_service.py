"""
Integration tests for document lifecycle and access rules.
"""
import uuid

import pytest
import pytest_asyncio

from app.core.exceptions import DuplicateName, Forbidden, NotFound
from app.db.models.document import DEFAULT_CONTENT
from app.domains.collaboration.services import CollaborationService
from app.domains.documents.schemas import DocumentCreate, DocumentUpdate
from app.domains.documents.services import DocumentService


@pytest_asyncio.fixture
async def users(make_user):
    return {
        "owner": await make_user("owner"),
        "collaborator": await make_user("collaborator"),
        "stranger": await make_user("stranger"),
    }


@pytest.fixture
def service(db_session):
    return DocumentService(db_session)


async def share(db_session, document, user, owner):
    await CollaborationService(db_session, accept_requires_owner=False).accept_access_request(
        document.uuid, user.uuid, owner
    )


class TestCreate:

    async def test_create_sets_owner_and_defaults(self, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])

        assert document.owner_id == users["owner"].uuid
        assert document.collaborators == []
        assert document.content == DEFAULT_CONTENT

    async def test_name_unique_per_owner(self, service, users):
        await service.create_document(DocumentCreate(name="Report"), users["owner"])

        with pytest.raises(DuplicateName):
            await service.create_document(DocumentCreate(name="Report"), users["owner"])

    async def test_same_name_for_other_owner(self, service, users):
        await service.create_document(DocumentCreate(name="Report"), users["owner"])
        other = await service.create_document(DocumentCreate(name="Report"), users["stranger"])
        assert other.owner_id == users["stranger"].uuid


class TestRead:

    async def test_list_owned_then_shared(self, db_session, service, users):
        own = await service.create_document(DocumentCreate(name="Mine"), users["collaborator"])
        shared = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        await service.create_document(DocumentCreate(name="Private"), users["owner"])
        await share(db_session, shared, users["collaborator"], users["owner"])

        documents = await service.list_documents(users["collaborator"])

        assert [d.uuid for d in documents] == [own.uuid, shared.uuid]

    async def test_get_by_collaborator_and_stranger(self, db_session, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        await share(db_session, document, users["collaborator"], users["owner"])

        assert (await service.get_document(document.uuid, users["collaborator"])).name == "Report"
        with pytest.raises(Forbidden):
            await service.get_document(document.uuid, users["stranger"])

    async def test_get_missing(self, service, users):
        with pytest.raises(NotFound):
            await service.get_document(uuid.uuid4(), users["owner"])

    async def test_populated_view_owner_only(self, db_session, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        await share(db_session, document, users["collaborator"], users["owner"])

        populated = await service.get_document_populated(document.uuid, users["owner"])
        assert populated["collaborators"] == [
            {"uuid": users["collaborator"].uuid, "username": "collaborator"}
        ]

        with pytest.raises(Forbidden):
            await service.get_document_populated(document.uuid, users["collaborator"])

    async def test_get_owner(self, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        assert await service.get_owner(document.uuid) == users["owner"].uuid


class TestUpdateDelete:

    async def test_collaborator_can_edit(self, db_session, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        await share(db_session, document, users["collaborator"], users["owner"])

        content = [{"type": "paragraph", "children": [{"text": "hello"}]}]
        updated = await service.update_document(
            document.uuid, DocumentUpdate(content=content), users["collaborator"]
        )

        assert updated.content == content
        assert updated.name == "Report"
        assert updated.collaborators == [users["collaborator"].uuid]

    async def test_stranger_cannot_edit(self, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        with pytest.raises(Forbidden):
            await service.update_document(document.uuid, DocumentUpdate(name="Mine"), users["stranger"])

    async def test_rename_to_taken_name(self, service, users):
        await service.create_document(DocumentCreate(name="Report"), users["owner"])
        draft = await service.create_document(DocumentCreate(name="Draft"), users["owner"])

        with pytest.raises(DuplicateName):
            await service.update_document(draft.uuid, DocumentUpdate(name="Report"), users["owner"])

    async def test_delete_owner_only(self, db_session, service, users):
        document = await service.create_document(DocumentCreate(name="Report"), users["owner"])
        await share(db_session, document, users["collaborator"], users["owner"])

        with pytest.raises(Forbidden):
            await service.delete_document(document.uuid, users["collaborator"])

        await service.delete_document(document.uuid, users["owner"])
        with pytest.raises(NotFound):
            await service.load(document.uuid)
        assert await service.list_documents(users["collaborator"]) == []
