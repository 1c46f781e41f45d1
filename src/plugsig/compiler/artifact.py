# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of compiled signature lists.

Signature artifacts are compact JSON documents a host can register from
without loading the schema. The format is versioned so future changes can be
detected.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from plugsig.model.signature import ParamDescriptor, ParamRole, SignatureDescriptor, SyntaxShape

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".signatures.json"


def serialize(signatures: Sequence[SignatureDescriptor]) -> str:
    """Serialize a signature list to a compact JSON string."""
    return json.dumps(
        {"v": ARTIFACT_FORMAT_VERSION, "signatures": [_signature_to_dict(s) for s in signatures]},
        separators=(",", ":"),
    )


def deserialize(data: str) -> list[SignatureDescriptor]:
    """Deserialize a signature list from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The signatures in their original order.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return [_signature_from_dict(s) for s in obj.get("signatures", [])]


def write_artifact(signatures: Sequence[SignatureDescriptor], path: Path) -> None:
    """Write a signature artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(signatures), encoding="utf-8")


def read_artifact(path: Path) -> list[SignatureDescriptor]:
    """Read and deserialize a signature artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _signature_to_dict(signature: SignatureDescriptor) -> dict[str, Any]:
    d: dict[str, Any] = {"name": signature.name, "params": [_param_to_dict(p) for p in signature.params]}
    if signature.usage:
        d["usage"] = signature.usage
    return d


def _signature_from_dict(obj: dict[str, Any]) -> SignatureDescriptor:
    return SignatureDescriptor(
        name=obj["name"],
        usage=obj.get("usage", ""),
        params=tuple(_param_from_dict(p) for p in obj.get("params", [])),
    )


def _param_to_dict(param: ParamDescriptor) -> dict[str, Any]:
    d: dict[str, Any] = {"name": param.name, "role": param.role.value, "shape": param.shape.value}
    if param.usage:
        d["usage"] = param.usage
    if param.short is not None:
        d["short"] = param.short
    return d


def _param_from_dict(obj: dict[str, Any]) -> ParamDescriptor:
    return ParamDescriptor(
        name=obj["name"],
        role=ParamRole(obj["role"]),
        shape=SyntaxShape(obj["shape"]),
        usage=obj.get("usage", ""),
        short=obj.get("short"),
    )
