# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""MeshWeld - Merge triangle meshes into one by welding coincident vertices."""

__version__ = "0.1.0"
