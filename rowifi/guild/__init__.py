"""Server documents, their settings, their tiers and their portable backups."""