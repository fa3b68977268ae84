"""Constants shared across flux-lsp."""

from __future__ import annotations

# Tag namespace of Flux components, as in <flux:button>
FLUX_NAMESPACE = "flux"

# Characters that should re-trigger completion while typing a tag
TRIGGER_CHARACTERS = ["<", " ", "f", "l", "u", "x", ":"]

# Number of props listed in a component's documentation before truncating
MAX_DOCUMENTED_PROPS = 5

# Livewire and Alpine.js attributes offered on every Flux component
INTEROP_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("wire:model", "Two-way bind to a Livewire property"),
    ("wire:model.live", "Two-way bind with live updates"),
    ("wire:model.blur", "Two-way bind on blur"),
    ("wire:model.change", "Two-way bind on change"),
    ("wire:click", "Handle click event in Livewire"),
    ("wire:submit", "Handle form submit in Livewire"),
    ("wire:loading", "Show element during loading state"),
    ("wire:target", "Specify loading target action"),
    ("wire:confirm", "Show confirmation dialog before action"),
    ("x-data", "Alpine.js data scope"),
    ("x-show", "Alpine.js conditional display"),
    ("x-if", "Alpine.js conditional rendering"),
    ("x-on:click", "Alpine.js click handler"),
    ("@click", "Alpine.js click handler (shorthand)"),
)

# Sigils for bound (:prop) and event (@event) attributes
ATTRIBUTE_SIGILS = (":", "@")

# File suffix of Blade templates scanned by the catalog generator
BLADE_SUFFIX = ".blade.php"

# Directories skipped when scanning for Blade templates
EXCLUDED_DIRS = {".git", "node_modules"}

# Environment variable overriding the catalog location
CATALOG_ENV_VAR = "FLUX_LSP_CATALOG"

CATALOG_FILENAME = "components.json"
