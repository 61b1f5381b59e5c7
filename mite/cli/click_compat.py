from __future__ import annotations

from typing import cast

import click
import rich_click

rich_click.rich_click.USE_CLICK_SHORT_HELP = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.STYLE_COMMANDS_TABLE_COLUMN_WIDTH_RATIO = (1, 3)

RichGroup = cast(type[click.Group], rich_click.RichGroup)
RichCommand = cast(type[click.Command], rich_click.RichCommand)

__all__ = ["RichCommand", "RichGroup", "click"]
