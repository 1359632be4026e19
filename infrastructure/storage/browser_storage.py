import json

import streamlit.components.v1 as components

TOKEN_COOKIE = "mentor_auth_token"
REFRESH_TOKEN_COOKIE = "mentor_refresh_token"
ROLE_COOKIE = "mentor_user_role"

COOKIE_NAMES = (TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, ROLE_COOKIE)
COOKIE_MAX_AGE = 2592000  # 30 days


def write_browser_credentials(credentials):
    """Mirror credentials into this browser's cookies and localStorage; None wipes them."""
    if credentials is None:
        values = {name: None for name in COOKIE_NAMES}
    else:
        values = {
            TOKEN_COOKIE: credentials.token,
            REFRESH_TOKEN_COOKIE: credentials.refresh_token,
            ROLE_COOKIE: credentials.role,
        }

    components.html(
        f"""
        <script>
          const values = {json.dumps(values)};
          const maxAge = {COOKIE_MAX_AGE};
          const setCookie = (cookieStr) => {{
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
          }};
          Object.entries(values).forEach(([name, value]) => {{
            if (value) {{
              setCookie(name + "=" + encodeURIComponent(value) + "; path=/; max-age=" + maxAge + "; SameSite=Lax");
              localStorage.setItem(name, value);
            }} else {{
              setCookie(name + "=; path=/; max-age=0; SameSite=Lax");
              localStorage.removeItem(name);
            }}
          }});
          sessionStorage.removeItem("mentor_restore_attempted");
        </script>
        """,
        height=0,
    )


def restore_cookies_from_local_storage():
    """Cookies can expire while localStorage keeps the session; copy it back and reload once."""
    names_js = json.dumps(list(COOKIE_NAMES))
    components.html(
        f"""
        <script>
        (function () {{
          try {{
            const names = {names_js};
            const token = localStorage.getItem("{TOKEN_COOKIE}");
            const attempted = sessionStorage.getItem("mentor_restore_attempted");
            const hasCookie = document.cookie.split("; ").some((x) => x.trim().startsWith("{TOKEN_COOKIE}="));
            if (!token || hasCookie || attempted) return;

            sessionStorage.setItem("mentor_restore_attempted", "1");
            names.forEach((name) => {{
              const value = localStorage.getItem(name);
              if (!value) return;
              const cookieStr = name + "=" + encodeURIComponent(value) + "; path=/; max-age={COOKIE_MAX_AGE}; SameSite=Lax";
              document.cookie = cookieStr;
              try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
            }});
            window.parent.location.reload();
          }} catch (e) {{
            console.error("Session restore error", e);
          }}
        }})();
        </script>
        """,
        height=0,
    )
