"""
Tests for the server entry point.
"""

import asyncio
import socket

import pytest

import run
from users_api.app.main import create_app


class TestMain:
    """Tests for run.main."""

    def test_port_in_use_exits(self, database):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as holder:
            holder.bind(("127.0.0.1", 0))
            holder.listen(1)
            port = holder.getsockname()[1]

            with pytest.raises(SystemExit) as exc_info:
                asyncio.run(run.main(create_app(database=database), host="127.0.0.1", port=port))

        assert exc_info.value.code == 1
