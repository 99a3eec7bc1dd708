"""Extract contacts, deals and tasks from rendered ActiveCampaign pages."""

__version__ = "0.1.0"
