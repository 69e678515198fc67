# Supabase Auth
# This module uses Supabase's built-in OAuth sign-in
# No custom tables are required - Supabase Auth handles:
# - The provider redirect and PKCE code exchange
# - Session tokens and their refresh
# - Provider metadata on the user (name, full_name, nickname, avatar_url)

"""
Supabase Auth calls used by the board:
- auth.sign_in_with_oauth() - Build the provider sign-in URL
- auth.exchange_code_for_session() - Finish sign-in on the callback
- auth.set_session() - Bind a request's client to the browser's token pair
- auth.on_auth_state_change() - Follow SIGNED_IN / TOKEN_REFRESHED / SIGNED_OUT
- auth.sign_out() - End the session

The token pair is kept in the signed session cookie, nowhere else.
"""
