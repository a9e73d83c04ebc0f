"""Events, the MQ event bus and the event consumer service."""