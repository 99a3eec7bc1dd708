"""HTML snapshots of the pages the extractors understand."""

CONTACTS_URL = "https://acme.activehosted.com/app/contacts?page=1"
DEALS_URL = "https://acme.activehosted.com/app/deals/board"
TASKS_URL = "https://acme.activehosted.com/app/tasks"


def _page(body: str) -> str:
    return f"<html><head><title>ActiveCampaign</title></head><body>{body}</body></html>"


def _contact_row(row_id: str, name: str, email: str, phone: str, account: str, date: str) -> str:
    return f"""
    <tr id="{row_id}" class="contacts_index_contact-row">
      <td data-testid="c-table__cell--full-name"><a class="full-name" href="/app/contacts/{row_id}">{name}</a></td>
      <td data-testid="c-table__cell--email"><a class="email" href="#">{email}</a></td>
      <td data-testid="c-table__cell--phone"><a class="phone" href="#">{phone}</a></td>
      <td data-testid="c-table__cell--account">{account}</td>
      <td data-testid="c-table__cell--date">{date}</td>
    </tr>"""


ACTIVECAMPAIGN_CONTACTS_HTML = _page(
    '<table class="c-table"><tbody class="contacts-index-body">'
    + _contact_row("contactrow_101", "Ada Lovelace", "ada@example.com", "+1 555 0101", "Analytical Engines", "2024-01-05")
    + _contact_row("contactrow_102", "Grace Hopper", "grace@example.com", "", "—", "2024-02-11")
    + _contact_row("contactrow_103", "", "nobody@example.com", "", "", "")
    + "</tbody></table>"
)

GENERIC_CONTACTS_HTML = _page(
    """
    <table><tbody>
      <tr data-contact-id="c-1"><td>Alan Turing</td><td>alan@example.com</td><td>555-0199</td>
          <td><span class="owner">Bletchley</span><span class="tag">vip</span></td></tr>
      <tr data-contact-id="c-2"><td>Only Name</td><td>x</td></tr>
      <tr><td>Katherine Johnson</td><td>kj@example.com</td><td>555-0123</td></tr>
    </tbody></table>
    <div class="contact-card" data-contact-id="card-1"><h3>Card Person</h3></div>
    """
)

CONTACT_CARDS_HTML = _page(
    """
    <div class="contact-card" data-contact-id="card-1">
      <h3>Margaret Hamilton</h3>
      <a href="mailto:margaret@example.com">margaret@example.com</a>
      <span class="tag">apollo</span><span class="tag">nasa</span>
    </div>
    <div class="contact-item">
      <a href="mailto:anon@example.com">anon@example.com</a>
    </div>
    <div class="contact-item"><p>nothing useful</p></div>
    """
)

DEAL_BOARD_FRAGMENT = """
<div class="deals_index_deal-board_column">
  <div class="deals_index_deal-board_column__title"><camp-text>Qualified</camp-text></div>
  <div class="deals_index_deal-card">
    <a class="deal-link" href="/app/deals/501">Open</a>
    <div class="deals_index_deal-card_region title"><camp-text>Website redesign</camp-text></div>
    <div class="deals_index_deal-card_region value">$12,000</div>
    <div class="deals_index_deal-card_region contact-fullname-acctname"><camp-text>Ada Lovelace</camp-text></div>
    <div class="deals_index_deal-card_region next-action">Call tomorrow</div>
  </div>
</div>
<div class="deals_index_deal-board_column">
  <div class="deals_index_deal-board_column__title"><camp-text>Proposal</camp-text></div>
  <div class="deals_index_deal-card">
    <a class="deal-link" href="/app/deals/502">Open</a>
    <div class="deals_index_deal-card_region title"><camp-text>Annual support</camp-text></div>
    <div class="deals_index_deal-card_region value">$4,500</div>
  </div>
  <div class="deals_index_deal-card">
    <div class="deals_index_deal-card_region title"><camp-text>Hardware refresh</camp-text></div>
  </div>
</div>
"""

DEAL_BOARD_HTML = _page(f'<div class="deals_index_deal-board">{DEAL_BOARD_FRAGMENT}</div>')

GENERIC_DEALS_HTML = _page(
    """
    <table><tbody>
      <tr data-deal-id="d-1"><td>Consulting</td><td>$900</td><td>Won</td><td>Alan Turing</td></tr>
      <tr><td>No id deal</td><td></td><td></td></tr>
      <tr><td></td><td>$1</td><td>Lost</td></tr>
    </tbody></table>
    """
)


def _task_row(row_id: str, task_type: str, title: str, linked: str, due_tip: str, status: str, extra_class: str = "") -> str:
    return f"""
    <tr id="{row_id}" class="tasks_task-row {extra_class}">
      <td class="type"><span class="deal-task-type">{task_type}</span></td>
      <td class="tasks_index__title"><span class="task-title">{title}</span>
          <div class="task-description">Notes for {title}</div></td>
      <td class="owner-type"><span rel="tip">{linked}</span></td>
      <td class="date"><span rel="tip" data-original-title="{due_tip}">Tomorrow</span></td>
      <td><span class="status-text">{status}</span></td>
      <td><a href="/app/deals/501">View</a></td>
    </tr>"""


TASKS_HTML = _page(
    "<table><tbody>"
    + _task_row("ember1721", "Call", "Follow up on proposal", "Website redesign", "Mar 3, 2026 10:00 AM", "Incomplete")
    # Same task rendered again with different markup and spacing.
    + """
    <tr id="ember1790" class="tasks_task-row highlighted">
      <td class="type"><span class="deal-task-type"> call </span></td>
      <td class="tasks_index__title"><b><span class="task-title">Follow up   on proposal</span></b></td>
      <td class="owner-type"><em><span rel="tip">Website redesign</span></em></td>
      <td class="date"><span rel="tip" data-original-title="Mar 3, 2026 10:00 AM">In 2 days</span></td>
      <td><span class="status-text">Incomplete</span></td>
    </tr>"""
    + _task_row("ember1800", "Email", "Send contract", "Annual support", "Mar 9, 2026 9:00 AM", "Complete", "completed")
    + "</tbody></table>"
)
