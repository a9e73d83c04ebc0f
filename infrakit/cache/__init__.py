"""String caches kept in memory or backed by a supplied Redis client."""