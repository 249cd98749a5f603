"""Catalog of common Portuguese verbs used by the verbs tab and flashcards."""

from typing import Tuple

from ..models import Example, StaticVerb


COMMON_VERBS: Tuple[StaticVerb, ...] = (
    # -ar
    StaticVerb("falar", "说话", "ar", (
        Example("Eu falo português.", "我说葡萄牙语。"),
    )),
    StaticVerb("estar", "在；处于（状态）", "ar", (
        Example("Estou cansado hoje.", "我今天很累。"),
    )),
    StaticVerb("ficar", "留下；变得", "ar"),
    StaticVerb("dar", "给", "ar"),
    StaticVerb("chegar", "到达", "ar"),
    StaticVerb("passar", "经过；度过", "ar"),
    StaticVerb("deixar", "离开；让", "ar"),
    StaticVerb("encontrar", "找到；遇见", "ar"),
    StaticVerb("chamar", "叫；称呼", "ar"),
    StaticVerb("começar", "开始", "ar", (
        Example("A aula começa às oito.", "课八点开始。"),
    )),
    StaticVerb("trabalhar", "工作", "ar"),
    StaticVerb("gostar", "喜欢", "ar", (
        Example("Gosto muito de café.", "我很喜欢咖啡。"),
    )),
    StaticVerb("morar", "居住", "ar"),
    StaticVerb("andar", "走路", "ar"),
    StaticVerb("comprar", "买", "ar"),
    StaticVerb("estudar", "学习", "ar"),
    StaticVerb("pensar", "想；思考", "ar"),
    StaticVerb("olhar", "看", "ar"),
    # -er
    StaticVerb("ser", "是", "er", (
        Example("Ela é professora.", "她是老师。"),
    )),
    StaticVerb("ter", "有", "er", (
        Example("Tenho dois irmãos.", "我有两个兄弟。"),
    )),
    StaticVerb("fazer", "做", "er"),
    StaticVerb("poder", "能够", "er"),
    StaticVerb("dizer", "说；告诉", "er"),
    StaticVerb("ver", "看见", "er"),
    StaticVerb("saber", "知道", "er"),
    StaticVerb("querer", "想要", "er", (
        Example("Quero um copo de água.", "我想要一杯水。"),
    )),
    StaticVerb("dever", "应该；欠", "er"),
    StaticVerb("conhecer", "认识", "er"),
    StaticVerb("comer", "吃", "er", (
        Example("Vamos comer juntos?", "我们一起吃饭吧？"),
    )),
    StaticVerb("beber", "喝", "er"),
    StaticVerb("escrever", "写", "er"),
    StaticVerb("aprender", "学会", "er"),
    StaticVerb("entender", "理解", "er"),
    StaticVerb("vender", "卖", "er"),
    # -ir
    StaticVerb("ir", "去", "ir", (
        Example("Vou à praia amanhã.", "我明天去海滩。"),
    )),
    StaticVerb("vir", "来", "ir"),
    StaticVerb("partir", "出发；打破", "ir"),
    StaticVerb("abrir", "打开", "ir"),
    StaticVerb("dormir", "睡觉", "ir", (
        Example("Durmo oito horas por noite.", "我每晚睡八个小时。"),
    )),
    StaticVerb("sentir", "感觉", "ir"),
    StaticVerb("pedir", "请求；点（菜）", "ir"),
    StaticVerb("ouvir", "听", "ir"),
    StaticVerb("sair", "出去", "ir"),
    StaticVerb("decidir", "决定", "ir"),
    StaticVerb("dividir", "分开；分享", "ir"),
    StaticVerb("subir", "上去", "ir"),
)


def search_verbs(query: str) -> Tuple[StaticVerb, ...]:
    """
    Filter the catalog for the verbs tab.
    
    Matches a case-insensitive substring of the Portuguese word or a
    substring of the Chinese gloss. An empty query returns everything.
    """
    query = (query or "").strip()
    if not query:
        return COMMON_VERBS
    folded = query.lower()
    return tuple(
        v for v in COMMON_VERBS
        if folded in v.word.lower() or query in v.cn
    )
