"""Remote service clients."""

from team_balancer.clients.supabase_roster_client import SupabaseRosterClient

__all__ = ["SupabaseRosterClient"]
