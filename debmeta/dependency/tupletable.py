# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Architecture alias table.

Maps canonical ``abi-libc-os-cpu`` tuples to their conventional short
names, in the order dpkg's tupletable lists them. ``<cpu>`` matches any CPU
token and is substituted on expansion. The first matching row wins, so
specific rows must precede the generic ``<cpu>`` rows.
"""

from __future__ import annotations

__all__ = ["CPU_PLACEHOLDER", "TUPLE_TABLE"]

CPU_PLACEHOLDER = "<cpu>"

# (long tuple, short name)
TUPLE_TABLE: tuple[tuple[str, str], ...] = (
    ("eabi-uclibc-linux-arm", "uclibc-linux-armel"),
    ("base-uclibc-linux-<cpu>", "uclibc-linux-<cpu>"),
    ("eabihf-musl-linux-arm", "musl-linux-armhf"),
    ("base-musl-linux-<cpu>", "musl-linux-<cpu>"),
    ("eabihf-gnu-linux-arm", "armhf"),
    ("eabi-gnu-linux-arm", "armel"),
    ("abin32-gnu-linux-mips64r6el", "mipsn32r6el"),
    ("abin32-gnu-linux-mips64r6", "mipsn32r6"),
    ("abin32-gnu-linux-mips64el", "mipsn32el"),
    ("abin32-gnu-linux-mips64", "mipsn32"),
    ("abi64-gnu-linux-mips64r6el", "mips64r6el"),
    ("abi64-gnu-linux-mips64r6", "mips64r6"),
    ("abi64-gnu-linux-mips64el", "mips64el"),
    ("abi64-gnu-linux-mips64", "mips64"),
    ("spe-gnu-linux-powerpc", "powerpcspe"),
    ("x32-gnu-linux-amd64", "x32"),
    ("base-gnu-linux-<cpu>", "<cpu>"),
    ("base-gnu-kfreebsd-amd64", "kfreebsd-amd64"),
    ("base-gnu-kfreebsd-i386", "kfreebsd-i386"),
    ("base-gnu-kopensolaris-amd64", "kopensolaris-amd64"),
    ("base-gnu-kopensolaris-i386", "kopensolaris-i386"),
    ("base-gnu-hurd-amd64", "hurd-amd64"),
    ("base-gnu-hurd-i386", "hurd-i386"),
    ("base-bsd-dragonflybsd-amd64", "dragonflybsd-amd64"),
    ("base-bsd-freebsd-amd64", "freebsd-amd64"),
    ("base-bsd-freebsd-arm", "freebsd-arm"),
    ("base-bsd-freebsd-arm64", "freebsd-arm64"),
    ("base-bsd-freebsd-i386", "freebsd-i386"),
    ("base-bsd-freebsd-powerpc", "freebsd-powerpc"),
    ("base-bsd-freebsd-ppc64", "freebsd-ppc64"),
    ("base-bsd-freebsd-riscv", "freebsd-riscv"),
    ("base-bsd-openbsd-<cpu>", "openbsd-<cpu>"),
    ("base-bsd-netbsd-<cpu>", "netbsd-<cpu>"),
    ("base-bsd-darwin-amd64", "darwin-amd64"),
    ("base-bsd-darwin-arm", "darwin-arm"),
    ("base-bsd-darwin-arm64", "darwin-arm64"),
    ("base-bsd-darwin-i386", "darwin-i386"),
    ("base-bsd-darwin-powerpc", "darwin-powerpc"),
    ("base-bsd-darwin-ppc64", "darwin-ppc64"),
    ("base-sysv-aix-powerpc", "aix-powerpc"),
    ("base-sysv-aix-ppc64", "aix-ppc64"),
    ("base-sysv-solaris-amd64", "solaris-amd64"),
    ("base-sysv-solaris-i386", "solaris-i386"),
    ("base-sysv-solaris-sparc", "solaris-sparc"),
    ("base-sysv-solaris-sparc64", "solaris-sparc64"),
    ("base-tos-mint-m68k", "mint-m68k"),
)
