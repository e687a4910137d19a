"""
Unit tests for StorageService.

MongoClient is patched; these tests do not need a running MongoDB.
See tests/integration for tests against a live database.
"""

from datetime import datetime
from unittest.mock import MagicMock, Mock, patch

import pytest
from pymongo import ReplaceOne
from pymongo.errors import BulkWriteError

from fmcsa_register.models import Entry
from fmcsa_register.services.storage_service import StorageService


@pytest.fixture
def mock_client():
    with patch('fmcsa_register.services.storage_service.MongoClient') as client_cls:
        yield client_cls


@pytest.fixture
def service(mock_client):
    return StorageService(mongo_uri='mongodb://test:27017/', database='TEST', collection='entries')


@pytest.fixture
def entries():
    return [
        Entry(number='MC-1', title='ONE', decided='01/05/2024', category='NAME CHANGE'),
        Entry(number='MC-2', title='TWO', category='REVOCATION'),
    ]


class TestStorageServiceInit:
    """Connection setup."""

    def test_connects_and_pings(self, mock_client, service):
        mock_client.assert_called_once_with('mongodb://test:27017/', serverSelectionTimeoutMS=5000)
        mock_client.return_value.admin.command.assert_called_once_with('ping')
        assert service.database_name == 'TEST'
        assert service.collection_name == 'entries'


class TestUpsertEntries:
    """Test suite for upsert_entries()."""

    def test_empty_list_skips_database(self, service):
        result = service.upsert_entries([], date_fetched='05-JAN-24')

        assert result == {'success': True, 'upserted_count': 0, 'modified_count': 0}
        service.collection.bulk_write.assert_not_called()

    def test_replace_one_per_entry(self, service, entries):
        service.collection.bulk_write.return_value = Mock(upserted_count=2, modified_count=0)

        result = service.upsert_entries(entries, date_fetched='05-JAN-24')

        assert result == {'success': True, 'upserted_count': 2, 'modified_count': 0}
        operations = service.collection.bulk_write.call_args[0][0]
        assert len(operations) == 2
        assert all(isinstance(op, ReplaceOne) for op in operations)

    def test_database_error_reported(self, service, entries):
        service.collection.bulk_write.side_effect = BulkWriteError({'writeErrors': []})

        result = service.upsert_entries(entries, date_fetched='05-JAN-24')

        assert result['success'] is False
        assert result['error'].startswith('MongoDB error')

    def test_malformed_date_raises(self, service, entries):
        with pytest.raises(ValueError):
            service.upsert_entries(entries, date_fetched='2024-01-05')


class TestQueries:
    """Test suite for get_entries(), has_date() and delete_date()."""

    def test_get_entries_single_date(self, service):
        cursor = MagicMock()
        cursor.sort.return_value = [{
            '_id': 'oid-1', 'document_id': '05-JAN-24_MC-1_abc', 'number': 'MC-1', 'title': 'ONE',
            'decided': 'N/A', 'category': 'DISMISSAL', 'date_fetched': '05-JAN-24',
            'register_date': datetime(2024, 1, 5), 'fetched_at': datetime(2024, 1, 5, 9, 30)
        }]
        service.collection.find.return_value = cursor

        result = service.get_entries('05-JAN-24')

        query = service.collection.find.call_args[0][0]
        assert query == {'register_date': {'$gte': datetime(2024, 1, 5), '$lte': datetime(2024, 1, 5)}}
        assert result == [Entry(number='MC-1', title='ONE', decided='N/A', category='DISMISSAL')]

    def test_get_entries_ties_sorted_by_insertion(self, service):
        cursor = MagicMock()
        cursor.sort.return_value = []
        service.collection.find.return_value = cursor

        service.get_entries('01-JAN-24', '31-JAN-24')

        cursor.sort.assert_called_once_with([('register_date', 1), ('_id', 1)])

    def test_get_entries_range_with_category(self, service):
        service.collection.find.return_value = MagicMock(sort=Mock(return_value=[]))

        service.get_entries('01-JAN-24', '31-JAN-24', category='REVOCATION')

        query = service.collection.find.call_args[0][0]
        assert query['register_date']['$lte'] == datetime(2024, 1, 31)
        assert query['category'] == 'REVOCATION'

    def test_has_date(self, service):
        service.collection.count_documents.return_value = 1

        assert service.has_date('05-JAN-24') is True
        service.collection.count_documents.assert_called_once_with({'date_fetched': '05-JAN-24'}, limit=1)

    def test_delete_date(self, service):
        service.collection.delete_many.return_value = Mock(deleted_count=4)

        assert service.delete_date('05-JAN-24') == {'success': True, 'deleted_count': 4}

    def test_create_indexes(self, service):
        service.create_indexes()

        names = [c.kwargs['name'] for c in service.collection.create_index.call_args_list]
        assert names == ['idx_document_id', 'idx_register_date_category', 'idx_date_fetched', 'idx_number']

    def test_context_manager_closes_client(self, mock_client):
        with StorageService(mongo_uri='mongodb://test:27017/', database='TEST', collection='entries'):
            pass

        mock_client.return_value.close.assert_called_once()
