#!/usr/bin/env python3
"""
Google Sheets Service - Read and write cell values.

Values are written with valueInputOption USER_ENTERED by default, so
Google parses numbers, dates and formulas exactly as if typed into the
UI. Nothing is evaluated locally.
"""

import json
import logging
from typing import Optional, List, Dict, Any

from google_services.auth import GoogleAuth
from google_services.drive_service import DriveService, SPREADSHEET_MIME_TYPE
from google_services.mapping import compact

logger = logging.getLogger(__name__)


def parse_values(values_json: str) -> List[List[Any]]:
    """
    Parse a JSON array of rows, e.g. '[["a", 1], ["b", 2]]'.

    Raises:
        ValueError: If the text is not a JSON array of arrays
    """
    try:
        values = json.loads(values_json)
    except ValueError:
        raise ValueError("Values must be a JSON array of rows") from None

    if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
        raise ValueError("Values must be a JSON array of rows")
    return values


def _update_record(update: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "updatedRange": update.get("updatedRange"),
        "updatedRows": update.get("updatedRows", 0),
        "updatedColumns": update.get("updatedColumns", 0),
        "updatedCells": update.get("updatedCells", 0),
    }


class SheetsService:
    """
    Google Sheets API service wrapper.
    """

    def __init__(self, auth: Optional[GoogleAuth] = None, drive: Optional[DriveService] = None):
        """
        Initialize Sheets service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
            drive: DriveService used for listing (shares auth by default)
        """
        self._auth = auth or GoogleAuth()
        self._drive = drive or DriveService(self._auth)
        self._service = None

    @property
    def service(self):
        """Get the Sheets API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("sheets")
        return self._service

    def list_spreadsheets(self, max_results: int = 20) -> List[Dict[str, Any]]:
        """List recently modified spreadsheets."""
        return self._drive.list_files(SPREADSHEET_MIME_TYPE, max_results)

    def get_spreadsheet(self, spreadsheet_id: str) -> Dict[str, Any]:
        """
        Get spreadsheet metadata and its sheet (tab) list.

        Cell data is not included.
        """
        spreadsheet = self.service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            includeGridData=False,
        ).execute()

        properties = spreadsheet.get("properties") or {}
        sheets = []
        for sheet in spreadsheet.get("sheets", []):
            sheet_props = sheet.get("properties") or {}
            grid = sheet_props.get("gridProperties") or {}
            sheets.append(compact({
                "sheetId": sheet_props.get("sheetId"),
                "title": sheet_props.get("title", ""),
                "index": sheet_props.get("index", 0),
                "rowCount": grid.get("rowCount"),
                "columnCount": grid.get("columnCount"),
            }))

        return compact({
            "id": spreadsheet.get("spreadsheetId", spreadsheet_id),
            "title": properties.get("title", ""),
            "locale": properties.get("locale"),
            "url": spreadsheet.get("spreadsheetUrl"),
            "sheets": sheets,
        })

    def read_range(self, spreadsheet_id: str, range_name: str) -> Dict[str, Any]:
        """Read cell values from an A1 range (e.g. 'Sheet1!A1:C10')."""
        result = self.service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=range_name,
        ).execute()

        values = result.get("values", [])
        return {
            "range": result.get("range", range_name),
            "majorDimension": result.get("majorDimension", "ROWS"),
            "values": values,
            "rowCount": len(values),
        }

    def write_range(
        self,
        spreadsheet_id: str,
        range_name: str,
        values: List[List[Any]],
        raw: bool = False,
    ) -> Dict[str, Any]:
        """Overwrite cells starting at range_name."""
        result = self.service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=range_name,
            valueInputOption="RAW" if raw else "USER_ENTERED",
            body={"values": values},
        ).execute()
        logger.info("Updated %s cell(s) in %s", result.get("updatedCells", 0), spreadsheet_id)
        return _update_record(result)

    def append_rows(
        self,
        spreadsheet_id: str,
        range_name: str,
        values: List[List[Any]],
        raw: bool = False,
    ) -> Dict[str, Any]:
        """Append rows after the last row of the table found in range_name."""
        result = self.service.spreadsheets().values().append(
            spreadsheetId=spreadsheet_id,
            range=range_name,
            valueInputOption="RAW" if raw else "USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": values},
        ).execute()
        return _update_record(result.get("updates") or {})

    def clear_range(self, spreadsheet_id: str, range_name: str) -> Dict[str, Any]:
        """Clear values (not formatting) in a range."""
        result = self.service.spreadsheets().values().clear(
            spreadsheetId=spreadsheet_id,
            range=range_name,
            body={},
        ).execute()
        return {"clearedRange": result.get("clearedRange", range_name)}

    def create_spreadsheet(self, title: str) -> Dict[str, Any]:
        """Create an empty spreadsheet."""
        result = self.service.spreadsheets().create(
            body={"properties": {"title": title}},
        ).execute()
        return {
            "id": result.get("spreadsheetId"),
            "title": (result.get("properties") or {}).get("title", title),
            "url": result.get("spreadsheetUrl"),
        }
