"""
Install layout and relocatable path resolution.

Directories are recorded at build time (the install layout). At run time each
one is re-derived relative to where the executable actually lives, so a moved
installation tree still reports consistent paths.
"""

from dataclasses import dataclass

DEFAULT_PREFIX = "/usr/local/pgsql"


def canonicalize_path(path: str) -> str:
    """
    Tidy a '/'-separated path.

    Drops empty and '.' segments, folds 'dir/..' pairs and removes the
    trailing separator. A leading '/' is kept, as are leading '..' segments
    of a relative path.
    """
    if not path:
        return path

    absolute = path.startswith("/")
    parts: list[str] = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == ".." and parts and parts[-1] != "..":
            parts.pop()
            continue
        if part == ".." and absolute and not parts:
            # '..' above the root stays at the root
            continue
        parts.append(part)

    joined = "/".join(parts)
    if absolute:
        return "/" + joined
    return joined or "."


def trim_directory(path: str) -> str:
    """Remove the last path component ('/usr/bin/postgres' -> '/usr/bin')."""
    stripped = path.rstrip("/")
    idx = stripped.rfind("/")
    if idx < 0:
        return ""
    if idx == 0:
        return "/"
    return stripped[:idx]


def make_relative_path(target_path: str, bin_path: str, exec_path: str) -> str:
    """
    Resolve a build-time directory relative to the running executable.

    If the executable's directory ends with the part of `bin_path` that is not
    shared with `target_path`, that part is swapped for the matching tail of
    `target_path`. Otherwise the build-time `target_path` is returned.

    Example: target '/usr/local/pgsql/lib', bin '/usr/local/pgsql/bin' and
    executable '/opt/pg/bin/postgres' give '/opt/pg/lib'.
    """
    target_parts = target_path.split("/")
    bin_parts = bin_path.split("/")

    # The shared prefix has to end on a separator in both paths, so
    # '/usr/lib' and '/usr/libexec' only share '/usr/'.
    common = 0
    limit = min(len(target_parts), len(bin_parts)) - 1
    while common < limit and target_parts[common] == bin_parts[common]:
        common += 1
    if common == 0:
        return canonicalize_path(target_path)

    bin_tail = [p for p in bin_parts[common:] if p]
    target_tail = "/".join(target_parts[common:])

    exec_dir = canonicalize_path(trim_directory(exec_path))
    exec_parts = exec_dir.split("/") if exec_dir else []

    if bin_tail and len(exec_parts) > len(bin_tail) and exec_parts[-len(bin_tail):] == bin_tail:
        base = "/".join(exec_parts[: -len(bin_tail)]) or "/"
        return canonicalize_path(f"{base}/{target_tail}")

    return canonicalize_path(target_path)


@dataclass(frozen=True)
class InstallLayout:
    """Build-time install directories."""

    bindir: str
    docdir: str
    htmldir: str
    includedir: str
    pkgincludedir: str
    includedir_server: str
    libdir: str
    pkglibdir: str
    localedir: str
    mandir: str
    sharedir: str
    sysconfdir: str

    @classmethod
    def from_prefix(cls, prefix: str = DEFAULT_PREFIX, **overrides: str) -> "InstallLayout":
        """
        Derive the standard layout under `prefix`.

        Shared directories get a 'postgresql' subdirectory unless the prefix
        already names the product ('postgres' or 'pgsql' in it), the same rule
        configure applies. Keyword arguments replace single directories.
        """
        prefix = canonicalize_path(prefix) if prefix else DEFAULT_PREFIX
        sub = "" if ("postgres" in prefix or "pgsql" in prefix) else "/postgresql"

        libdir = f"{prefix}/lib"
        includedir = f"{prefix}/include"
        pkgincludedir = f"{includedir}{sub}"
        docdir = f"{prefix}/share/doc{sub}"

        dirs = {
            "bindir": f"{prefix}/bin",
            "docdir": docdir,
            "htmldir": docdir,
            "includedir": includedir,
            "pkgincludedir": pkgincludedir,
            "includedir_server": f"{pkgincludedir}/server",
            "libdir": libdir,
            "pkglibdir": f"{libdir}{sub}",
            "localedir": f"{prefix}/share/locale",
            "mandir": f"{prefix}/share/man",
            "sharedir": f"{prefix}/share{sub}",
            "sysconfdir": f"{prefix}/etc{sub}",
        }
        unknown = set(overrides) - set(dirs)
        if unknown:
            raise ValueError(f"unknown install directories: {', '.join(sorted(unknown))}")
        dirs.update({k: v for k, v in overrides.items() if v})
        return cls(**dirs)

    def _relative(self, target: str, exec_path: str) -> str:
        return make_relative_path(target, self.bindir, exec_path)

    def get_doc_path(self, exec_path: str) -> str:
        return self._relative(self.docdir, exec_path)

    def get_html_path(self, exec_path: str) -> str:
        return self._relative(self.htmldir, exec_path)

    def get_include_path(self, exec_path: str) -> str:
        return self._relative(self.includedir, exec_path)

    def get_pkginclude_path(self, exec_path: str) -> str:
        return self._relative(self.pkgincludedir, exec_path)

    def get_includeserver_path(self, exec_path: str) -> str:
        return self._relative(self.includedir_server, exec_path)

    def get_lib_path(self, exec_path: str) -> str:
        return self._relative(self.libdir, exec_path)

    def get_pkglib_path(self, exec_path: str) -> str:
        return self._relative(self.pkglibdir, exec_path)

    def get_locale_path(self, exec_path: str) -> str:
        return self._relative(self.localedir, exec_path)

    def get_man_path(self, exec_path: str) -> str:
        return self._relative(self.mandir, exec_path)

    def get_share_path(self, exec_path: str) -> str:
        return self._relative(self.sharedir, exec_path)

    def get_etc_path(self, exec_path: str) -> str:
        return self._relative(self.sysconfdir, exec_path)
