"""Portal domain: companies, projects, audits, access requests and dashboard."""
