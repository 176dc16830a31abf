# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""CloudinaryVolume: host-side wrapper building adapters from configuration.

CloudinaryVolume is what a host application holds for one configured
volume. It provides:

1. Configuration: CloudinaryConfig instance at self.config
2. Adapter: lazy CloudinaryAdapter built from the resolved config, with the
   subfolder applied as path prefix
3. Root URL: public base URL of the volume
4. Interface: lazy `cli` (Click) property

Usage:
    volume = CloudinaryVolume(config=cloudinary_config_from_env())
    volume.adapter.write("img/cat.jpg", data)
    volume.root_url            # "https://res.example.com/site/"

    # Command line
    volume.cli()               # genro-cloudinary ls img/
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx

from .adapter import CloudinaryAdapter
from .client import ResourceClient
from .config import CloudinaryConfig, parse_env
from .paths import ResourceKind

if TYPE_CHECKING:
    import click

logger = logging.getLogger(__name__)


class CloudinaryVolume:
    """One configured Cloudinary volume.

    Attributes:
        config: CloudinaryConfig as entered (placeholders unresolved)

    Properties:
        adapter: CloudinaryAdapter (lazy, created on first access)
        root_url: Public root URL, or None if the volume has no URLs
        cli: Click CLI group (lazy, created on first access)
    """

    display_name = "Cloudinary"

    def __init__(
        self,
        config: CloudinaryConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize volume.

        Args:
            config: CloudinaryConfig instance. If None, creates default.
            transport: Optional httpx transport handed to the client (tests).
        """
        self.config = config or CloudinaryConfig()
        self._transport = transport
        self._adapter: CloudinaryAdapter | None = None
        self._cli: click.Group | None = None

    def validate(self) -> None:
        """Raise ConfigurationError if a required setting is missing once resolved."""
        self.config.resolved().validate()

    def create_adapter(self) -> CloudinaryAdapter:
        """Build a new adapter from the resolved configuration."""
        config = self.config.resolved()
        config.validate()
        client = ResourceClient(config, transport=self._transport)
        logger.debug("Adapter for cloud %r, prefix %r", config.cloud_name, config.path_prefix)
        return CloudinaryAdapter(client, path_prefix=config.path_prefix)

    @property
    def adapter(self) -> CloudinaryAdapter:
        """CloudinaryAdapter for this volume, created on first access."""
        if self._adapter is None:
            self._adapter = self.create_adapter()
        return self._adapter

    @property
    def root_url(self) -> str | None:
        """Public root URL with the subfolder appended and a trailing slash."""
        if not self.config.has_urls:
            return None
        base = parse_env(self.config.url).rstrip("/")
        return f"{base}/{self.config.subfolder}".rstrip("/") + "/"

    # -------------------------------------------------------------------------
    # Interface factory (lazy property)
    # -------------------------------------------------------------------------

    @property
    def cli(self) -> click.Group:
        """Click CLI group with file commands.

        Created on first access.

        Usage:
            genro-cloudinary --help
        """
        if self._cli is None:
            self._cli = self._create_cli()
        return self._cli

    def _create_cli(self) -> click.Group:
        """Build Click CLI: one command per adapter operation."""
        from contextlib import contextmanager

        import click

        from .exceptions import CloudinaryFsError

        volume = self

        @contextmanager
        def remote_errors():
            try:
                yield
            except CloudinaryFsError as exc:
                raise click.ClickException(str(exc)) from exc

        def finish(ok: bool, message: str) -> None:
            if ok:
                click.echo(message)
            else:
                click.echo(message, err=True)
                raise click.exceptions.Exit(1)

        @click.group()
        @click.version_option(package_name="genro-cloudinary")
        @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
        def cli(verbose: bool) -> None:
            """Cloudinary volume: filesystem operations on a Cloudinary cloud."""
            if verbose:
                logging.basicConfig(level=logging.DEBUG)

        @cli.command("ls")
        @click.argument("prefix", default="")
        @click.option(
            "--kind",
            "kinds",
            multiple=True,
            type=click.Choice([k.value for k in ResourceKind]),
            help="Resource kind to list (repeatable, default image)",
        )
        @click.option("--json", "as_json", is_flag=True, help="Output JSON")
        def ls_cmd(prefix: str, kinds: tuple[str, ...], as_json: bool) -> None:
            """List files whose path starts with PREFIX."""
            with remote_errors():
                entries = volume.adapter.list_contents(
                    prefix, kinds=[ResourceKind(k) for k in kinds] or None
                )
            if as_json:
                click.echo(json.dumps([e.to_dict() for e in entries], indent=2))
                return
            for entry in entries:
                click.echo(f"{entry.size:>12}  {entry.mimetype:<24}  {entry.path}")

        @cli.command("stat")
        @click.argument("path")
        @click.option("--json", "as_json", is_flag=True, help="Output JSON")
        def stat_cmd(path: str, as_json: bool) -> None:
            """Show metadata of PATH."""
            with remote_errors():
                meta = volume.adapter.get_metadata(path)
            data = meta.to_dict()
            if as_json:
                click.echo(json.dumps(data, indent=2))
                return
            for key, value in data.items():
                click.echo(f"{key}: {value}")

        @cli.command("exists")
        @click.argument("path")
        def exists_cmd(path: str) -> None:
            """Exit 0 if PATH exists, 1 otherwise."""
            with remote_errors():
                found = volume.adapter.has(path)
            finish(found, "yes" if found else "no")

        @cli.command("url")
        @click.argument("path")
        def url_cmd(path: str) -> None:
            """Print the delivery URL of PATH."""
            with remote_errors():
                url = volume.adapter.get_url(path)
            finish(bool(url), url or f"No URL for {path}")

        @cli.command("get")
        @click.argument("path")
        @click.option("--output", "-o", type=click.File("wb"), default="-", help="Target file")
        def get_cmd(path: str, output) -> None:
            """Download PATH (to stdout by default)."""
            with remote_errors():
                stream = volume.adapter.read_stream(path)
                if stream is None:
                    raise click.ClickException(f"Cannot resolve {path}")
                for chunk in stream:
                    output.write(chunk)

        @cli.command("put")
        @click.argument("local", type=click.File("rb"))
        @click.argument("path")
        @click.option("--public-id", default=None, help="Explicit remote identifier")
        def put_cmd(local, path: str, public_id: str | None) -> None:
            """Upload LOCAL file to PATH (overwrites)."""
            options = {"public_id": public_id} if public_id else None
            with remote_errors():
                meta = volume.adapter.write_stream(path, local, options)
            click.echo(f"{meta.path} ({meta.size} bytes, {meta.mimetype})")

        @cli.command("rm")
        @click.argument("path")
        def rm_cmd(path: str) -> None:
            """Delete PATH."""
            with remote_errors():
                deleted = volume.adapter.delete(path)
            finish(deleted, f"Deleted {path}" if deleted else f"Not deleted: {path}")

        @cli.command("rmdir")
        @click.argument("prefix")
        def rmdir_cmd(prefix: str) -> None:
            """Delete every file under PREFIX."""
            with remote_errors():
                volume.adapter.delete_dir(prefix)
            click.echo(f"Deleted {prefix}")

        @cli.command("mv")
        @click.argument("src")
        @click.argument("dst")
        def mv_cmd(src: str, dst: str) -> None:
            """Rename SRC to DST."""
            with remote_errors():
                renamed = volume.adapter.rename(src, dst)
            finish(renamed, f"{src} -> {dst}" if renamed else f"Rename mismatch: {src} -> {dst}")

        @cli.command("cp")
        @click.argument("src")
        @click.argument("dst")
        def cp_cmd(src: str, dst: str) -> None:
            """Copy SRC to DST."""
            with remote_errors():
                copied = volume.adapter.copy(src, dst)
            finish(copied, f"{src} -> {dst}" if copied else f"Copy failed: {src} -> {dst}")

        @cli.command("mkdir")
        @click.argument("name")
        def mkdir_cmd(name: str) -> None:
            """Directories are implicit: echoes NAME."""
            with remote_errors():
                created = volume.adapter.create_dir(name)
            click.echo(created["path"])

        return cli


__all__ = ["CloudinaryVolume"]
