"""One-time download and caching of a pinned fzf release binary."""

import logging
import os
import platform as platform_module
import shutil
import tarfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import httpx

from fzf_mcp.config import Settings
from fzf_mcp.constants import FZF_RELEASE_URL, FZF_VERSION
from fzf_mcp.exceptions import InstallError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

_OS_NAMES = {
    "windows": "windows",
    "darwin": "darwin",
    "linux": "linux",
}

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "armv7",
    "armv7": "armv7",
    "arm": "armv7",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}

MANUAL_INSTALL_HINTS = [
    "Windows: winget install fzf",
    "macOS:   brew install fzf",
    "Linux:   apt install fzf (or your package manager)",
]


@dataclass
class DownloadInfo:
    url: str
    filename: str
    is_zip: bool


def detect_platform(
    system: Optional[str] = None, machine: Optional[str] = None
) -> Tuple[str, str]:
    """Map the running OS and CPU to fzf's release asset naming."""
    system = (system or platform_module.system()).lower()
    machine = (machine or platform_module.machine()).lower()

    os_name = _OS_NAMES.get(system)
    if os_name is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {system}")
    arch = _ARCH_NAMES.get(machine)
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine}")
    return os_name, arch


def download_info(
    version: str = FZF_VERSION,
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> DownloadInfo:
    """Return the release URL and archive name for this platform."""
    os_name, arch = detect_platform(system, machine)
    is_zip = os_name == "windows"
    extension = "zip" if is_zip else "tar.gz"
    filename = f"fzf-{version}-{os_name}_{arch}.{extension}"
    base_url = FZF_RELEASE_URL.format(version=version)
    return DownloadInfo(url=f"{base_url}/{filename}", filename=filename, is_zip=is_zip)


def _download(client: httpx.Client, url: str, dest: Path) -> None:
    logger.info(f"Downloading fzf from {url}...")
    try:
        with client.stream("GET", url) as response:
            if response.status_code != 200:
                raise InstallError(
                    f"Failed to download: {response.status_code} {response.reason_phrase}"
                )
            with open(dest, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
    except httpx.HTTPError as e:
        dest.unlink(missing_ok=True)
        raise InstallError(f"Failed to download {url}: {e}") from e
    except InstallError:
        dest.unlink(missing_ok=True)
        raise
    logger.info(f"Downloaded to {dest}")


def _extract(archive: Path, dest_dir: Path, name: str, is_zip: bool) -> None:
    """Extract only the fzf binary from the release archive."""
    logger.info(f"Extracting {archive}...")
    try:
        if is_zip:
            with zipfile.ZipFile(archive) as zf:
                member = next(
                    (m for m in zf.namelist() if Path(m).name == name), None
                )
                if member is None:
                    raise InstallError(f"{name} not found in {archive.name}")
                with zf.open(member) as src, open(dest_dir / name, "wb") as dst:
                    shutil.copyfileobj(src, dst)
        else:
            with tarfile.open(archive, "r:gz") as tf:
                member = next(
                    (m for m in tf.getmembers() if m.isfile() and Path(m.name).name == name),
                    None,
                )
                if member is None:
                    raise InstallError(f"{name} not found in {archive.name}")
                src = tf.extractfile(member)
                with src, open(dest_dir / name, "wb") as dst:
                    shutil.copyfileobj(src, dst)
    except (tarfile.TarError, zipfile.BadZipFile) as e:
        raise InstallError(f"Failed to extract archive: {e}") from e


def _make_executable(path: Path) -> None:
    if os.name == "nt":
        return
    try:
        path.chmod(0o755)
        logger.debug(f"Made {path} executable")
    except OSError as e:
        logger.warning(f"Could not make {path} executable: {e}")


def install_fzf(
    bin_dir: Path,
    version: str = FZF_VERSION,
    force: bool = False,
    client: Optional[httpx.Client] = None,
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> Path:
    """Download the fzf release for this platform into ``bin_dir``.

    Does nothing when the binary is already cached, unless ``force`` is set.
    Returns the path of the binary.
    """
    info = download_info(version, system, machine)
    name = "fzf.exe" if info.is_zip else "fzf"
    bin_dir = Path(bin_dir)
    binary_path = bin_dir / name

    if binary_path.exists() and not force:
        logger.info(f"fzf binary already exists at {binary_path}, skipping download")
        return binary_path

    archive_path = bin_dir / info.filename
    own_client = client is None
    if own_client:
        client = httpx.Client(follow_redirects=True, timeout=60.0)
    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
        _download(client, info.url, archive_path)
        _extract(archive_path, bin_dir, name, info.is_zip)
    except OSError as e:
        raise InstallError(f"Cannot write fzf into {bin_dir}: {e}") from e
    finally:
        if own_client:
            client.close()
        try:
            archive_path.unlink(missing_ok=True)
        except OSError:
            logger.debug(f"Could not remove {archive_path}")

    if not binary_path.exists():
        raise InstallError(f"Binary not found after extraction: {binary_path}")
    _make_executable(binary_path)

    logger.info(f"fzf {version} installed at {binary_path}")
    return binary_path


def cached_binary(bin_dir: Path) -> Optional[Path]:
    """Return the cached binary in ``bin_dir`` if it is present."""
    for name in ("fzf", "fzf.exe"):
        candidate = Path(bin_dir) / name
        if candidate.is_file():
            return candidate
    return None


def resolve_fzf_path(settings: Settings) -> str:
    """Pick the fzf executable to run.

    Order: explicit ``FZF_PATH``, the download cache, ``fzf`` on ``PATH``,
    then the bare name so the spawn error names what was tried.
    """
    if settings.fzf_path:
        return settings.fzf_path
    cached = cached_binary(settings.bin_dir)
    if cached is not None:
        return str(cached)
    on_path = shutil.which("fzf")
    if on_path:
        return on_path
    return "fzf"


def ensure_fzf(settings: Settings) -> str:
    """Resolve the fzf binary, downloading it first when auto-install is on.

    A failed download is logged and the server keeps running: fzf may still
    be reachable through ``PATH``.
    """
    if (
        settings.auto_install
        and not settings.fzf_path
        and cached_binary(settings.bin_dir) is None
        and shutil.which("fzf") is None
    ):
        try:
            install_fzf(settings.bin_dir, settings.fzf_version)
        except InstallError as e:
            logger.error(f"Failed to install fzf: {e}")
            for hint in MANUAL_INSTALL_HINTS:
                logger.warning(f"  {hint}")
    return resolve_fzf_path(settings)
