# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (C) 2024 Jonathan Lee
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License version 3
# as published by the Free Software Foundation.
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see https://www.gnu.org/licenses/.

import os
import sys
import webbrowser
from typing import Optional


class FileSink:
    """Writes finished documents to disk and opens them in the default viewer."""

    def __init__(self, output_dir: Optional[str] = None, launch: bool = True):
        self.output_dir = output_dir
        self.launch = launch

    def path_for(self, filename: str) -> str:
        if self.output_dir is None:
            return filename
        return os.path.join(self.output_dir, filename)

    def save(self, filename: str, content: str) -> bool:
        """Overwrite `filename` with `content`. Returns False if it cannot be written."""
        path = self.path_for(filename)
        try:
            payload = content.encode("utf-8")
        except UnicodeError as e:
            print(f"Error in save: cannot encode {path}: {e}", file=sys.stderr)
            return False
        try:
            with open(path, "wb") as f:
                f.write(payload)
        except OSError as e:
            print(f"Error in save: cannot write {path}: {e}", file=sys.stderr)
            return False
        return True

    def open_in_browser(self, filename: str) -> bool:
        """Best-effort launch of the OS handler; failures are logged, never raised."""
        url = f"file://{os.path.abspath(self.path_for(filename))}"
        try:
            opened = webbrowser.open(url)
        except (webbrowser.Error, OSError) as e:
            print(f"WARNING: could not open {url}: {e}", file=sys.stderr)
            return False
        if not opened:
            print(f"WARNING: no browser available to open {url}", file=sys.stderr)
        return bool(opened)

    def publish(self, filename: str, content: str) -> bool:
        """Save, then launch if enabled. Only the save outcome is returned."""
        saved = self.save(filename, content)
        if saved and self.launch:
            self.open_in_browser(filename)
        return saved
