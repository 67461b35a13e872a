"""
Status page rendering.
Wallet snapshot and cache listing in, HTML out. The embedded script walks the
listed transactions one at a time against /status/{id} and fills in the
confirmation column.
"""

from __future__ import annotations

from argateway.models.cache import CacheEntry
from argateway.models.wallet import WalletStats
from argateway.renderer.templates import DEFAULT_TEMPLATE, STATUS_COLORS, TEMPLATES, PageColors

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def _escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def format_size(size: int) -> str:
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)} B"
    return f"{value:.2f} {unit}"


def _styles(colors: PageColors) -> str:
    return f"""
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: {colors.background}; color: {colors.text_primary}; margin: 0; padding: 40px 20px;
        }}
        main {{ max-width: 960px; margin: 0 auto; }}
        h1 {{ font-size: 22px; margin: 0 0 24px; }}
        h2 {{ font-size: 16px; margin: 32px 0 12px; }}
        .panel {{ background: {colors.card_bg}; border: 1px solid {colors.border};
                  border-radius: 8px; padding: 16px 20px; }}
        .meta {{ color: {colors.text_secondary}; font-size: 14px; }}
        a {{ color: {colors.accent}; text-decoration: none; }}
        a:hover {{ text-decoration: underline; }}
        table {{ width: 100%; border-collapse: collapse; font-size: 14px; }}
        th, td {{ text-align: left; padding: 8px; border-bottom: 1px solid {colors.border}; }}
        td.mono {{ font-family: ui-monospace, SFMono-Regular, Menlo, monospace; }}
        .status-confirmed {{ color: {STATUS_COLORS["confirmed"]}; }}
        .status-pending {{ color: {STATUS_COLORS["pending"]}; }}
        .status-unknown {{ color: {STATUS_COLORS["unknown"]}; }}
    """


_POLL_SCRIPT = """
    (async function () {
        const cells = document.querySelectorAll('td[data-tx]');
        for (const cell of cells) {
            const id = cell.getAttribute('data-tx');
            let label = 'unknown', cls = 'status-unknown';
            try {
                const resp = await fetch('/status/' + encodeURIComponent(id));
                const body = await resp.json();
                if (body.success && body.data && body.data.confirmed) {
                    label = 'confirmed (' + body.data.confirmed.number_of_confirmations + ')';
                    cls = 'status-confirmed';
                } else if (body.success && body.data && body.data.status === 202) {
                    label = 'pending';
                    cls = 'status-pending';
                }
            } catch (e) {
                label = 'unknown';
            }
            cell.textContent = label;
            cell.className = cls;
        }
    })();
"""


def _entry_row(entry: CacheEntry) -> str:
    name = _escape_html(entry.name)
    return (
        "<tr>"
        f'<td class="mono"><a href="/tx/{name}">{name}</a></td>'
        f"<td>{format_size(entry.size)}</td>"
        f"<td>{_escape_html(entry.update_time)}</td>"
        f'<td data-tx="{name}" class="status-unknown">checking...</td>'
        "</tr>"
    )


def render_status_page(
    stats: WalletStats,
    entries: list[CacheEntry],
    total_size: int,
    explorer_url: str,
    template: str = DEFAULT_TEMPLATE,
) -> str:
    colors = TEMPLATES.get(template, TEMPLATES[DEFAULT_TEMPLATE])

    if stats.address:
        address = _escape_html(stats.address)
        explorer = _escape_html(explorer_url.rstrip("/"))
        address_html = f'<a href="{explorer}/address/{address}">{address}</a>'
    else:
        address_html = '<span class="meta">unknown (refreshing)</span>'

    if entries:
        rows = "\n".join(_entry_row(e) for e in entries)
        listing = f"""<table>
            <thead><tr><th>Transaction</th><th>Size</th><th>Updated</th><th>Status</th></tr></thead>
            <tbody>
{rows}
            </tbody>
        </table>"""
    else:
        listing = '<p class="meta">Cache is empty.</p>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Arweave Cache Gateway</title>
    <style>{_styles(colors)}</style>
</head>
<body>
<main>
    <h1>Arweave Cache Gateway</h1>
    <section class="panel">
        <p>Wallet: {address_html}</p>
        <p>Balance: {_escape_html(stats.balance_ar)} AR <span class="meta">({stats.balance} winston)</span></p>
    </section>
    <h2>Cache</h2>
    <p class="meta">{len(entries)} transactions &middot; {format_size(total_size)}</p>
    {listing}
</main>
<script>{_POLL_SCRIPT}</script>
</body>
</html>"""


def render_error_page(message: str = "Something went wrong.") -> str:
    colors = TEMPLATES[DEFAULT_TEMPLATE]
    return f"""<!DOCTYPE html><html><head><title>Error</title></head>
<body style="font-family:sans-serif;padding:40px;background:{colors.background};color:{colors.text_primary}">
<h1>Error</h1><p>{_escape_html(message)}</p></body></html>"""
