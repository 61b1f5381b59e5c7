"""List pipeline shared by every `mite <kind>` list command.

Retrieval-merge, filtering, sorting, column projection and rendering. This
package is CLI-only and NOT part of the public client API.
"""
