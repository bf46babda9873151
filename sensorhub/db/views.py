"""
SQL do PostgreSQL que acompanha a política de visibilidade.

As revisões do Alembic chamam estas funções; assim a view
``sensor_readings_effective`` é sempre gerada a partir de ``FIELD_POLICY``.
"""
from typing import Dict, List

from sensorhub.access.projection import FIELD_POLICY, Visibility

EFFECTIVE_VIEW = "public.sensor_readings_effective"

_PREDICADO_SQL = {
    Visibility.PREMIUM: "public.is_premium()",
    Visibility.ADMIN: "public.is_admin()",
}


def _coluna(name: str, visibility: Visibility) -> str:
    if visibility is Visibility.BASELINE:
        return f"sr.{name}"
    if visibility in _PREDICADO_SQL:
        return f"CASE WHEN {_PREDICADO_SQL[visibility]} THEN sr.{name} ELSE NULL END AS {name}"
    raise ValueError(f"Classe de visibilidade desconhecida: {visibility!r}")


def effective_view_sql(policy: Dict[str, Visibility] = FIELD_POLICY) -> str:
    colunas: List[str] = ["sr.id", "sr.device_id", "sr.timestamp"]
    colunas += [_coluna(name, visibility) for name, visibility in policy.items()]
    colunas.append("sr.created_at")
    corpo = ",\n  ".join(colunas)
    return (
        f"CREATE OR REPLACE VIEW {EFFECTIVE_VIEW}\n"
        "WITH (security_invoker = true) AS\n"
        f"SELECT\n  {corpo}\n"
        "FROM public.sensor_readings sr;"
    )


DROP_EFFECTIVE_VIEW_SQL = f"DROP VIEW IF EXISTS {EFFECTIVE_VIEW};"


# Em Supabase o schema auth já existe. Em um PostgreSQL puro criamos só
# auth.uid(), lendo o "sub" do JWT que o PostgREST coloca na sessão.
AUTH_UID_SHIM_SQL = """
CREATE SCHEMA IF NOT EXISTS auth;
DO $$
BEGIN
  IF to_regprocedure('auth.uid()') IS NULL THEN
    CREATE FUNCTION auth.uid() RETURNS uuid
    LANGUAGE sql STABLE
    AS 'SELECT nullif(current_setting(''request.jwt.claim.sub'', true), '''')::uuid';
  END IF;
END
$$;
"""


PREDICATE_FUNCTIONS_SQL = """
CREATE OR REPLACE FUNCTION public.is_admin()
RETURNS boolean
LANGUAGE sql STABLE SECURITY DEFINER SET search_path = public
AS $$
  SELECT EXISTS (
    SELECT 1 FROM public.profiles
    WHERE id = auth.uid() AND is_admin = true
  );
$$;

CREATE OR REPLACE FUNCTION public.is_premium()
RETURNS boolean
LANGUAGE sql STABLE SECURITY DEFINER SET search_path = public
AS $$
  SELECT EXISTS (
    SELECT 1 FROM public.profiles
    WHERE id = auth.uid()
      AND (subscription_tier = 'premium' OR is_admin = true)
  );
$$;

CREATE OR REPLACE FUNCTION public.has_role(_user_id uuid, _role public.app_role)
RETURNS boolean
LANGUAGE sql STABLE SECURITY DEFINER SET search_path = public
AS $$
  SELECT EXISTS (
    SELECT 1 FROM public.user_roles
    WHERE user_id = _user_id AND role = _role
  );
$$;
"""

DROP_PREDICATE_FUNCTIONS_SQL = """
DROP FUNCTION IF EXISTS public.has_role(uuid, public.app_role);
DROP FUNCTION IF EXISTS public.is_premium();
DROP FUNCTION IF EXISTS public.is_admin();
"""


# Cria o perfil quando o provedor de auth registra um usuário novo.
# ON CONFLICT deixa o trigger idempotente.
NEW_USER_TRIGGER_SQL = """
CREATE OR REPLACE FUNCTION public.handle_new_user()
RETURNS trigger
LANGUAGE plpgsql SECURITY DEFINER SET search_path = public
AS $$
BEGIN
  INSERT INTO public.profiles (id, email, display_name, subscription_tier, is_admin, created_at, updated_at)
  VALUES (
    NEW.id,
    NEW.email,
    COALESCE(NEW.raw_user_meta_data ->> 'display_name', NEW.email),
    'free',
    false,
    now(),
    now()
  )
  ON CONFLICT (id) DO NOTHING;
  RETURN NEW;
END;
$$;

DO $$
BEGIN
  IF to_regclass('auth.users') IS NOT NULL THEN
    DROP TRIGGER IF EXISTS on_auth_user_created ON auth.users;
    CREATE TRIGGER on_auth_user_created
      AFTER INSERT ON auth.users
      FOR EACH ROW EXECUTE FUNCTION public.handle_new_user();
  END IF;
END
$$;
"""

DROP_NEW_USER_TRIGGER_SQL = """
DO $$
BEGIN
  IF to_regclass('auth.users') IS NOT NULL THEN
    DROP TRIGGER IF EXISTS on_auth_user_created ON auth.users;
  END IF;
END
$$;
DROP FUNCTION IF EXISTS public.handle_new_user();
"""


_OWNED_DEVICE = (
    "EXISTS (SELECT 1 FROM public.devices d "
    "WHERE d.id = {tabela}.device_id AND d.user_id = auth.uid())"
)


def rls_policies_sql() -> List[str]:
    """
    Políticas de linha: dono lê/escreve o que é seu, admin lê tudo.
    Leituras não têm política de UPDATE/DELETE (append-only).
    """
    stmts = [
        "ALTER TABLE public.profiles ENABLE ROW LEVEL SECURITY;",
        "ALTER TABLE public.devices ENABLE ROW LEVEL SECURITY;",
        "ALTER TABLE public.sensor_readings ENABLE ROW LEVEL SECURITY;",
        "ALTER TABLE public.readings ENABLE ROW LEVEL SECURITY;",
        "ALTER TABLE public.user_roles ENABLE ROW LEVEL SECURITY;",

        'CREATE POLICY "profiles_select_own_or_admin" ON public.profiles '
        "FOR SELECT USING (id = auth.uid() OR public.is_admin());",
        'CREATE POLICY "profiles_update_admin" ON public.profiles '
        "FOR UPDATE USING (public.is_admin()) WITH CHECK (public.is_admin());",

        'CREATE POLICY "devices_select_own_or_admin" ON public.devices '
        "FOR SELECT USING (user_id = auth.uid() OR public.is_admin());",
        'CREATE POLICY "devices_insert_own" ON public.devices '
        "FOR INSERT WITH CHECK (user_id = auth.uid() OR public.is_admin());",
        'CREATE POLICY "devices_update_own" ON public.devices '
        "FOR UPDATE USING (user_id = auth.uid() OR public.is_admin());",

        'CREATE POLICY "user_roles_select_own_or_admin" ON public.user_roles '
        "FOR SELECT USING (user_id = auth.uid() OR public.is_admin());",
        'CREATE POLICY "user_roles_admin_insert" ON public.user_roles '
        "FOR INSERT WITH CHECK (public.is_admin());",
        'CREATE POLICY "user_roles_admin_delete" ON public.user_roles '
        "FOR DELETE USING (public.is_admin());",
    ]
    for tabela in ("sensor_readings", "readings"):
        dono = _OWNED_DEVICE.format(tabela=tabela)
        stmts.append(
            f'CREATE POLICY "{tabela}_select_own_or_admin" ON public.{tabela} '
            f"FOR SELECT USING ({dono} OR public.is_admin());"
        )
        stmts.append(
            f'CREATE POLICY "{tabela}_insert_own" ON public.{tabela} '
            f"FOR INSERT WITH CHECK ({dono} OR public.is_admin());"
        )
    return stmts


def drop_rls_policies_sql() -> List[str]:
    stmts = []
    for stmt in rls_policies_sql():
        if not stmt.startswith("CREATE POLICY"):
            continue
        nome = stmt.split('"')[1]
        tabela = stmt.split(" ON ")[1].split(" ")[0]
        stmts.append(f'DROP POLICY IF EXISTS "{nome}" ON {tabela};')
    for tabela in ("user_roles", "readings", "sensor_readings", "devices", "profiles"):
        stmts.append(f"ALTER TABLE public.{tabela} DISABLE ROW LEVEL SECURITY;")
    return stmts
