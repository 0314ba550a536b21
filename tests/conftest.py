"""Pytest configuration: puts the repository root on sys.path and provides an in-memory Drive client."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class FakeDriveClient(object):
    """Stands in for DriveClient, keeping folders and uploaded files in memory and recording every call."""

    def __init__(self):
        self.folders = []
        self.files = []
        self.calls = []
        self._next_id = 1

    def _new_id(self):
        new_id = f"id-{self._next_id}"
        self._next_id += 1
        return new_id

    def add_folder(self, name, parent_id="root", folder_id=None, trashed=False):
        if folder_id is None:
            folder_id = self._new_id()
        self.folders.append({"id": folder_id, "name": name, "parent": parent_id, "trashed": trashed})
        return folder_id

    def _children(self, parent_id):
        return [{"id": folder["id"], "name": folder["name"]} for folder in self.folders
                if folder["parent"] == parent_id and not folder["trashed"]]

    def find_folders(self, name, parent_id):
        self.calls.append(("find_folders", name, parent_id))
        return [folder for folder in self._children(parent_id) if folder["name"] == name]

    def list_child_folders(self, parent_id):
        self.calls.append(("list_child_folders", parent_id))
        return self._children(parent_id)

    def create_folder(self, name, parent_id):
        self.calls.append(("create_folder", name, parent_id))
        return self.add_folder(name, parent_id)

    def create_file(self, f, target_file_name, target_folder_id, target_mime_type, source_mime_type):
        self.calls.append(("create_file", target_file_name, target_folder_id))
        file_id = self._new_id()
        self.files.append({
            "id": file_id,
            "name": target_file_name,
            "mimeType": target_mime_type,
            "sourceMimeType": source_mime_type,
            "parents": [target_folder_id],
            "content": f.read()
        })
        return file_id

    def calls_named(self, method_name):
        return [call for call in self.calls if call[0] == method_name]


@pytest.fixture
def fake_drive_client():
    return FakeDriveClient()
