"""Standard-library import inference.

Snippets rarely carry their imports, so any ``name.`` reference where
``name`` is the short name of a standard package is assumed to be a
package reference. The guess is deliberately generous: a struct field
or local variable called ``time`` is also picked up, and the compile
repair loop drops the import again when the compiler rejects it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, MutableSet
from types import MappingProxyType

logger = logging.getLogger(__name__)

# Canonical import paths of packages that can be inferred from usage.
_STDLIB_PATHS: tuple[str, ...] = (
    "archive/tar", "archive/zip", "bufio", "bytes", "cmp", "compress/bzip2",
    "compress/flate", "compress/gzip", "compress/lzw", "compress/zlib",
    "container/heap", "container/list", "container/ring", "context", "crypto",
    "crypto/aes", "crypto/cipher", "crypto/des", "crypto/dsa", "crypto/ecdsa",
    "crypto/elliptic", "crypto/hmac", "crypto/md5", "crypto/rc4", "crypto/rsa",
    "crypto/sha1", "crypto/sha256", "crypto/sha512", "crypto/subtle",
    "crypto/tls", "crypto/x509", "crypto/x509/pkix", "database/sql",
    "database/sql/driver", "debug/dwarf", "debug/elf", "debug/gosym",
    "debug/macho", "debug/pe", "encoding/ascii85", "encoding/asn1",
    "encoding/base32", "encoding/base64", "encoding/binary", "encoding/csv",
    "encoding/gob", "encoding/hex", "encoding/json", "encoding/pem",
    "encoding/xml", "errors", "expvar", "flag", "fmt", "go/ast", "go/build",
    "go/doc", "go/parser", "go/printer", "go/token", "hash", "hash/adler32",
    "hash/crc32", "hash/crc64", "hash/fnv", "html", "image", "image/color",
    "image/draw", "image/gif", "image/jpeg", "image/png", "index/suffixarray",
    "io", "io/fs", "io/ioutil", "log", "log/slog", "log/syslog", "maps", "math",
    "math/big", "math/bits", "math/cmplx", "math/rand", "mime",
    "mime/multipart", "net", "net/http", "net/http/cgi", "net/http/fcgi",
    "net/http/httputil", "net/http/pprof", "net/mail", "net/netip", "net/rpc",
    "net/rpc/jsonrpc", "net/smtp", "net/textproto", "net/url", "os", "os/exec",
    "os/signal", "os/user", "path", "path/filepath", "reflect", "regexp",
    "regexp/syntax", "runtime", "runtime/cgo", "runtime/debug", "slices", "sort",
    "strconv", "strings", "sync", "sync/atomic", "syscall", "text/scanner",
    "text/tabwriter", "text/template", "text/template/parse", "time", "unicode",
    "unicode/utf16", "unicode/utf8", "unsafe",
)


def short_name(path: str) -> str:
    """Return the package name a path is referred to by in source.

    Args:
        path: Canonical import path (e.g., "math/rand").

    Returns:
        Last path segment (e.g., "rand").

    """
    return path.rsplit("/", 1)[-1]


# Short name -> canonical path. Built once at import, read-only afterwards.
STDLIB_PACKAGES: Mapping[str, str] = MappingProxyType(
    {short_name(path): path for path in _STDLIB_PATHS}
)

# Lowercase identifier of 2+ chars immediately followed by a dot
_QUALIFIER_PATTERN = re.compile(r"\b[a-z]\w+\.")


def infer_packages(text: str, into: MutableSet[str]) -> None:
    """Record standard packages referenced as ``name.`` in text.

    Only pass plain text here; comments and literals would produce
    spurious matches.

    Args:
        text: Plain-text portion of a source line.
        into: Set of canonical paths, updated in place.

    """
    for match in _QUALIFIER_PATTERN.finditer(text):
        path = STDLIB_PACKAGES.get(match.group(0)[:-1])
        if path is not None and path not in into:
            logger.debug("Inferred import %s from %r", path, match.group(0))
            into.add(path)
