"""Role and nickname binds: rank, group, asset and custom binds with templates."""