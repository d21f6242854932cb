import unittest
from unittest.mock import patch, MagicMock, call
import gspread # Import for exceptions
import requests

# Module to test
from milk_api.services.sheets import store
from milk_api.services.records import DeliveryRecord

HEADER = ['user', 'address', 'milk', 'partner', 'quantity', 'date']


# Patch target is where open_worksheet is LOOKED UP, which is in store.py
@patch('milk_api.services.sheets.store.open_worksheet')
class TestGoogleSheetStore(unittest.TestCase):

    def _make_store(self, mock_open, values=None):
        mock_ws = MagicMock()
        mock_ws.title = "Sheet1"
        mock_ws.get_all_values.return_value = values if values is not None else [
            HEADER,
            ['A', '1 Lane', 'whole', 'P1', '2', '2024-01-01'],
            ['', '', '', '', '', ''],
            ['A', '1 Lane', 'skim', 'P1', '1', '2024-02-01'],
        ]
        mock_ws.row_values.return_value = HEADER
        mock_open.return_value = mock_ws
        config = MagicMock()
        return store.GoogleSheetStore(config), mock_ws, config

    def test_list_records_skips_blank_rows_and_keeps_row_numbers(self, mock_open):
        sheet_store, mock_ws, config = self._make_store(mock_open)

        records = sheet_store.list_records()

        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].ref, 2)
        self.assertEqual(records[1].ref, 4) # Blank row 3 still counts
        self.assertEqual(records[1].milk, 'skim')
        self.assertEqual(records[1].quantity, '1')
        mock_open.assert_called_once_with(config)

    def test_list_records_empty_sheet(self, mock_open):
        sheet_store, _, _ = self._make_store(mock_open, values=[])
        self.assertEqual(sheet_store.list_records(), [])

    def test_worksheet_opened_once_per_store(self, mock_open):
        sheet_store, _, _ = self._make_store(mock_open)
        sheet_store.list_records()
        sheet_store.list_records()
        mock_open.assert_called_once()

    def test_append_record_in_header_order(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        mock_ws.row_values.return_value = ['date', 'user', 'milk', 'quantity']

        sheet_store.append_record({'user': 'C', 'milk': 'oat', 'quantity': 3, 'date': None})

        mock_ws.row_values.assert_called_once_with(1)
        mock_ws.append_row.assert_called_once_with(['', 'C', 'oat', 3], value_input_option='RAW')

    def test_append_record_writes_header_on_empty_sheet(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        mock_ws.row_values.return_value = []

        sheet_store.append_record({'user': 'C', 'milk': 'oat'})

        self.assertEqual(mock_ws.append_row.call_args_list, [
            call(HEADER, value_input_option='RAW'),
            call(['C', '', 'oat', '', '', ''], value_input_option='RAW'),
        ])

    def test_update_record_batches_changed_cells(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        record = DeliveryRecord(user='A', date='2024-02-01', ref=4)

        sheet_store.update_record(record, {'quantity': 5, 'partner': None})

        expected_batch_updates = [
            {'range': 'E4', 'values': [[5]]},  # Col E = quantity
            {'range': 'D4', 'values': [['']]}, # Col D = partner
        ]
        mock_ws.batch_update.assert_called_once_with(expected_batch_updates, value_input_option='RAW')

    def test_update_record_uses_header_from_list(self, mock_open):
        """A store that already listed rows reuses that header instead of re-reading row 1."""
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        record = sheet_store.list_records()[0]

        sheet_store.update_record(record, {'date': '2024-01-05'})

        mock_ws.row_values.assert_not_called()
        mock_ws.batch_update.assert_called_once_with(
            [{'range': 'F2', 'values': [['2024-01-05']]}], value_input_option='RAW'
        )

    def test_update_record_skips_unknown_columns(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        mock_ws.row_values.return_value = ['user', 'milk']
        record = DeliveryRecord(user='A', ref=2)

        sheet_store.update_record(record, {'partner': 'P2'})

        mock_ws.batch_update.assert_not_called()

    def test_update_record_api_error_propagates(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)
        mock_response = MagicMock(spec=requests.Response)
        mock_ws.batch_update.side_effect = gspread.exceptions.APIError(mock_response)

        with self.assertRaises(gspread.exceptions.APIError):
            sheet_store.update_record(DeliveryRecord(user='A', ref=2), {'milk': 'skim'})

    def test_delete_record_by_row_number(self, mock_open):
        sheet_store, mock_ws, _ = self._make_store(mock_open)

        sheet_store.delete_record(DeliveryRecord(user='A', ref=4))

        mock_ws.delete_rows.assert_called_once_with(4)


if __name__ == '__main__':
    unittest.main()
