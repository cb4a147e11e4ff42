"""The condition language used by custom binds and custom blacklists."""