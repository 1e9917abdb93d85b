"""Advice document composition.

Builds titled sections in a fixed construction order from the classification
tiers, the raw age and family facts. Optional sections are either emitted in
full or omitted; the serialized text is parsed back by sections.parse_advice().
"""

from kigyo_risk_jp.classifier import ClassificationTiers, Level, RiskProfile
from kigyo_risk_jp.profile import AgeBracket, ApplicantProfile, NormalizedFacts, age_bracket
from kigyo_risk_jp.sections import AdviceSection, SectionKind, serialize_sections

SAVING_RATE = 0.2  # 月収のうち貯蓄に回す割合


def fmt_yen(v: float) -> str:
    """1234567 → "1,234,567" (小数は最大3桁)"""
    if float(v).is_integer():
        return f"{int(v):,}"
    return f"{v:,.3f}".rstrip("0").rstrip(".")


# ---------------------------------------------------------------------------
# Fixed texts
# ---------------------------------------------------------------------------

_AGE_TEXTS: dict[AgeBracket, list[str]] = {
    AgeBracket.TWENTIES: [
        "あなたの若さは最大の武器です！未来は無限の可能性に満ちています。",
        "",
        "・20代は失敗してもリカバリーできる貴重な時期です。思い切ったチャレンジができるのは今です。",
        "・デジタルネイティブとしての感覚やトレンドへの敏感さは、ビジネスにおいて大きな強みになります。",
        "・今から経験を積むことで、30代、40代での飛躍的な成長につながります。",
        "・若い起業家は投資家からも注目されやすく、支援を受けやすい傾向があります。",
        "・エネルギーと柔軟性を活かして、新しい市場やニッチを開拓できるチャンスです。",
        "",
        "あなたの行動力と新鮮な視点は、既存の市場に革新をもたらす可能性を秘めています！",
    ],
    AgeBracket.THIRTIES: [
        "30代は経験と若さのバランスが取れた最高の時期です！",
        "",
        "・30代は専門性と実務経験が蓄積され始め、起業に最適な時期と言われています。",
        "・若さとスタミナを持ちながらも、業界の知識や人脈が形成されている絶妙なバランスです。",
        "・家族形成期でもあり、長期的な視点でビジネスを考えられる時期です。",
        "・失敗からの学びを活かせる柔軟性と、安定を求める責任感のバランスが取れています。",
        "・あなたの実務経験は、起業における現実的な判断力の基盤になります。",
        "",
        "あなたのキャリアで培った専門知識と若さのエネルギーは、成功への強力な推進力になるでしょう！",
    ],
    AgeBracket.FORTIES: [
        "40代は経験と人脈が充実した、起業の黄金期です！",
        "",
        "・40代はこれまでのキャリアで培った専門知識と人脈が最大限に活きる時期です。",
        "・業界での信頼関係がすでに構築されており、初期顧客の獲得がスムーズです。",
        "・マネジメント経験があれば、チームビルディングやリーダーシップのスキルが大きな強みになります。",
        "・人生経験から来る判断力と冷静さは、ビジネスの安定成長に不可欠な要素です。",
        "・家族や周囲の理解も得やすく、サポート体制を整えやすい時期です。",
        "",
        "あなたの豊富な経験と人脈は、起業成功への最短ルートを切り開くでしょう！",
    ],
    AgeBracket.FIFTIES: [
        "50代は知恵と経験が満ち溢れた、起業の成熟期です！",
        "",
        "・50代は長年のキャリアで培った深い専門知識と広範な人脈が最大の武器になります。",
        "・業界の課題や顧客ニーズを熟知しており、的確なソリューションを提供できる立場です。",
        "・財務的にも比較的余裕がある時期で、リスクに対する耐性が高まっています。",
        "・豊富な人生経験からくる冷静な判断力と問題解決能力は、ビジネスの安定と成長に直結します。",
        "・若手起業家のメンターとしての役割も果たせる、社会的価値の高い立場です。",
        "",
        "あなたの豊かな経験と知恵は、持続可能なビジネスを構築する強固な基盤となるでしょう！",
    ],
    AgeBracket.SIXTIES_PLUS: [
        "60代以上は知識と知恵の集大成、セカンドライフの新たな挑戦の時です！",
        "",
        "・60代以上は長年培った専門知識、人脈、人生経験が結実する素晴らしい時期です。",
        "・時間的な余裕があり、自分の情熱を注げる事業に取り組める絶好のチャンスです。",
        "・豊富な人生経験と冷静な判断力は、安定したビジネス運営の鍵となります。",
        "・若い世代にはない視点や知恵を活かした、ユニークなビジネスモデルを構築できます。",
        "・社会貢献や価値創造など、経済的成功だけでない多様な目標を設定できる自由があります。",
        "・デジタル技術と従来の知恵を組み合わせた、世代を超えたイノベーションを起こせる立場です。",
        "",
        "あなたの豊かな経験と知恵は、社会に新たな価値をもたらす貴重な資産です！",
    ],
}

_INCOME_TEXTS: dict[Level, list[str]] = {
    Level.LOW: [
        "・現在の月収は比較的低めですが、起業によって収入を増やせる可能性があります。",
        "・まずは副業として小規模に始め、月5万円の副収入から作りましょう。",
        "・スキルアップに投資し、提供できるサービスの価値を高めることを優先してください。",
        "・初期投資を最小限に抑えたビジネスモデル（オンラインサービス、コンサルティングなど）から始めましょう。",
        "・固定費を徹底的に見直し、生活防衛資金を少しずつ増やしていきましょう。",
    ],
    Level.MEDIUM: [
        "・現在の月収は平均的で、起業の基盤としては良いスタートポイントです。",
        "・本業を続けながら、週末や平日夜に副業として事業を始め、月10〜15万円の副収入を目指しましょう。",
        "・副業収入が本業の半分に達したら、独立を検討するタイミングかもしれません。",
        "・あなたのスキルや経験を活かせる分野で、差別化できるサービスを考えましょう。",
        "・本業で培った人脈やスキルを最大限に活用し、初期顧客の獲得に繋げましょう。",
    ],
    Level.HIGH: [
        "・現在の月収は高めで、起業のための良い資金基盤があります。",
        "・高収入を活かして、積極的に事業資金を確保しましょう。",
        "・あなたの専門性を活かした高単価サービスの提供を検討してください。",
        "・必要に応じて従業員やフリーランスを雇用し、早期にビジネスを拡大する戦略も有効です。",
        "・高収入の経験を活かして、ターゲット顧客を明確にし、プレミアムサービスの提供を検討しましょう。",
        "・投資や資産運用も並行して行い、複数の収入源を確保することをおすすめします。",
    ],
}

_FAMILY_TEXTS: dict[SectionKind, tuple[str, list[str]]] = {
    SectionKind.FAMILY_CHILDREN: ("子育て世帯向けアドバイス", [
        "・子供がいる家庭では、教育費や将来の進学費用も考慮した資金計画が重要です。",
        "・起業は子供に「チャレンジする姿」を見せる貴重な機会でもあります。",
        "・子供の将来のためにも、あなたが情熱を持って取り組める仕事を選ぶことは大切です。",
        "・起業初期は在宅や時間の融通が利く働き方ができるため、子育てとの両立がしやすくなる場合もあります。",
        "・家族の理解と協力を得るために、起業計画や将来のビジョンを共有しましょう。",
        "・子育て世帯向けの公的支援制度（児童手当、医療費助成など）も活用して、固定費を抑える工夫をしましょう。",
        "・同じく子育て中の起業家とのネットワークを構築し、情報交換や相互支援の関係を作ることも有効です。",
    ]),
    SectionKind.FAMILY_HOUSEHOLD: ("家族構成に応じたアドバイス", [
        "・家族がいる場合は、生命保険や医療保険の見直しを行いましょう。",
        "・家族と起業についてオープンに話し合い、理解と協力を得ることが重要です。",
        "・家族の将来のライフプランも考慮した資金計画を立てましょう。",
        "・配偶者の収入がある場合は、一時的に家計の主な支え手になってもらうことも検討できます。",
        "・家族の健康保険や社会保険の切り替えについても事前に調査しておきましょう。",
    ]),
    SectionKind.FAMILY_SINGLE: ("単身者向けアドバイス", [
        "・単身の場合は、リスクを取りやすい状況にあります。この機会を最大限に活かしましょう。",
        "・生活コストを見直し、固定費の削減ポイントを探してみましょう。",
        "・万が一の事態に備えた医療保険の加入を検討しましょう。",
        "・単身であることを活かして、起業初期は生活コストを最小限に抑えることも検討できます。",
        "・将来的なライフプランの変化（結婚、家族形成など）も視野に入れた長期的な事業計画を立てましょう。",
    ]),
}

# (月の副収入目標, 低投資ビジネスモデル例)
_SIDE_BUSINESS: dict[Level, tuple[str, str]] = {
    Level.LOW: ("5〜10万円", "個人サービス提供やオンラインコンテンツ販売"),
    Level.MEDIUM: ("10〜15万円", "コンサルティングやコーチング"),
    Level.HIGH: ("15〜20万円", "プレミアムコンサルティングや専門サービス"),
}

_LOW_SAVINGS_CHILDREN = [
    "・子育て中でも始められる、時間や場所に縛られない副業（ブログ執筆、オンラインコンサルティング、デジタル商品販売など）を検討しましょう。",
    "・子供の寝ている時間や保育園・学校に行っている時間を活用して、少しずつビジネスを構築していきましょう。",
    "・配偶者と協力して時間を確保する方法を話し合いましょう。",
]

_CAREER_TEXT = [
    "・終身雇用の崩壊、AI台頭による仕事の変化など、サラリーマンにも大きなリスクがあります。",
    "・会社員は「一つの会社」に依存するリスクがありますが、起業家は「複数の顧客」に支えられる強みがあります。",
    "・起業は自分の力で未来を切り開ける可能性があり、同じリスクを取るなら自分の夢に賭ける方が充実感も大きいでしょう。",
    "・会社員時代に培ったスキルや人脈は、起業後も大きな資産になります。",
]

_CAREER_CHILDREN = [
    "・子供の将来のためにも、親が自分の夢に挑戦する姿を見せることは、大きな教育的価値があります。",
    "・起業家として成功すれば、子供の教育資金や将来の選択肢を広げるための経済的基盤を築けます。",
    "・会社員よりも柔軟な働き方ができるため、子供の行事や緊急時にも対応しやすくなります。",
]

_ENCOURAGEMENT_HIGHEST = [
    "子育てしながらの起業は確かに挑戦ですが、多くの成功例があります。子供の存在がモチベーションとなり、効率的な働き方を模索するきっかけにもなります。まずは副業から始めて、少しずつリスクを減らしながら前進しましょう。子供に「夢を追いかける親」の姿を見せることは、何物にも代えがたい教育です。",
    "",
    "あなたの情熱とアイデアは、新しい価値を生み出す原動力です。起業は人生を変える大きなチャンスです。一歩踏み出す勇気を持ちましょう！",
]
_ENCOURAGEMENT_HIGH = [
    "家族がいることで慎重になるのは自然なことですが、それが夢を諦める理由にはなりません。むしろ、家族の存在が長期的な視点と責任感を育み、ビジネスの安定性につながることもあります。計画的に進めれば、家族の理解と協力を得ながら、着実に夢を実現できるでしょう。",
    "",
    "今こそ行動するときです。あなたのスキルと経験は、独自のビジネスを成功させる大きな武器になります。自分の可能性を信じて、一歩前に踏み出しましょう！",
]
_ENCOURAGEMENT_PARENT = [
    "子育てと起業の両立は、時間管理と優先順位付けの達人になるチャンスです。多くの親起業家が、子供の存在によって効率的な働き方を学び、むしろ成功につなげています。子供に「自分の人生を自分で切り拓く」生き方を見せることは、最高の教育になるでしょう。",
    "",
    "あなたの夢を追いかける姿は、子供たちにとって最高のロールモデルになります。今日から小さな一歩を踏み出し、その一歩を積み重ねていきましょう！",
]
_ENCOURAGEMENT_DEFAULT = [
    "起業は不安もありますが、自分の情熱を仕事にできる素晴らしいチャンスです。あなたのアイデアやスキルは、世界に新しい価値をもたらす可能性を秘めています。",
    "",
    "人生は一度きり。「やらなかった後悔」より「やった経験」の方が、あなたを成長させてくれます。今日から小さな一歩を踏み出し、あなたの夢に向かって進んでいきましょう！",
]

_COMMON_STEPS = [
    "収支管理アプリで毎月の支出を可視化する",
    "起業後の事業計画書を作成し、必要資金を明確にする",
    "起業仲間やメンターを見つけて定期的に相談する",
]

_INCOME_STEPS: dict[Level, list[str]] = {
    Level.LOW: [
        "最小限の初期投資で始められるビジネスモデルを選ぶ",
        "スキルアップのためのオンライン学習に投資する",
        "SNSを活用した無料マーケティングから始める",
    ],
    Level.MEDIUM: [
        "本業と副業のバランスを取りながら、段階的に移行する計画を立てる",
        "初期顧客獲得のために、既存の人脈を活用する",
        "月次で収支を分析し、事業の採算性を確認する",
    ],
    Level.HIGH: [
        "専門性を活かした高単価サービスの開発に注力する",
        "必要に応じて外部人材を活用し、早期にビジネスを拡大する",
        "事業と資産運用の両面から収入源を多様化する",
    ],
}

_CHILDREN_STEPS = [
    "子育てと両立できる柔軟な働き方を事業計画に組み込む",
    "家族の時間を確保するためのタイムマネジメント戦略を立てる",
    "子育て世帯向けの支援制度や税制優遇を調査し活用する",
]

_SENIOR_STEPS = [
    "豊富な経験と知識を活かしたコンサルティングやメンタリングを検討する",
    "ワークライフバランスを重視した事業設計を行う",
    "デジタル技術を活用して効率的なビジネスモデルを構築する",
]

# 50代と60代以上は同じ行動ステップ
_AGE_STEPS: dict[AgeBracket, list[str]] = {
    AgeBracket.TWENTIES: [
        "若手起業家向けのコミュニティやイベントに積極的に参加する",
        "メンターを見つけて定期的にアドバイスを受ける",
        "デジタルスキルを最大限に活用したビジネスモデルを検討する",
    ],
    AgeBracket.THIRTIES: [
        "これまでのキャリアで培った専門知識を活かせる分野を選ぶ",
        "仕事と家庭のバランスを考慮した事業計画を立てる",
        "同世代の起業家ネットワークを構築する",
    ],
    AgeBracket.FORTIES: [
        "長年の業界経験を活かした差別化戦略を立てる",
        "既存の人脈を活用して初期顧客を獲得する",
        "若手人材の採用・育成計画を検討する",
    ],
    AgeBracket.FIFTIES: _SENIOR_STEPS,
    AgeBracket.SIXTIES_PLUS: _SENIOR_STEPS,
}


# ---------------------------------------------------------------------------
# Section builders
# ---------------------------------------------------------------------------

def months_to_target(savings: int, target: int, monthly_income: int) -> int:
    """Months needed to reach target saving SAVING_RATE of income (切り上げ)."""
    shortfall = target - savings
    if shortfall <= 0:
        return 0
    # ceil(shortfall / (monthly_income * 0.2)) in integer arithmetic
    return -(-shortfall * 5 // monthly_income)


def _funding_goal(savings: int, monthly_income: int, tiers: ClassificationTiers) -> AdviceSection:
    three = tiers.three_months_cost
    lines = [
        f"最低でも{fmt_yen(three)}円（3ヶ月分）の生活費を確保することをおすすめします。",
        f"理想的には{fmt_yen(tiers.six_months_cost)}円（6ヶ月分）あれば、安心して起業に集中できます。",
    ]
    shortfall = three - savings
    if shortfall <= 0:
        lines.append(
            f"すでに{fmt_yen(three)}円の目標を達成しています。次のステップとして、事業資金の確保を検討しましょう。"
        )
    else:
        monthly_saving = monthly_income * SAVING_RATE
        months = months_to_target(savings, three, monthly_income)
        lines.append(
            f"あと{fmt_yen(shortfall)}円の貯蓄が必要です。月収の20%（{fmt_yen(monthly_saving)}円）を"
            f"貯蓄に回すと、約{months}ヶ月で達成できます。"
        )
    return AdviceSection(SectionKind.FUNDING_GOAL, "資金目標", "\n".join(lines))


def _age_encouragement(age: int) -> AdviceSection:
    bracket = age_bracket(age)
    return AdviceSection(
        SectionKind.AGE_ENCOURAGEMENT,
        f"{bracket.value}のあなたへ",
        "\n".join(_AGE_TEXTS[bracket]),
    )


def _income_advice(level: Level) -> AdviceSection:
    return AdviceSection(SectionKind.INCOME, "月収に応じたアドバイス", "\n".join(_INCOME_TEXTS[level]))


def family_variant(has_children: bool, family_count: int) -> SectionKind:
    if has_children:
        return SectionKind.FAMILY_CHILDREN
    if family_count > 1:
        return SectionKind.FAMILY_HOUSEHOLD
    return SectionKind.FAMILY_SINGLE


def _family_advice(has_children: bool, family_count: int) -> AdviceSection:
    kind = family_variant(has_children, family_count)
    title, lines = _FAMILY_TEXTS[kind]
    return AdviceSection(kind, title, "\n".join(lines))


def _low_savings_advice(level: Level, has_children: bool) -> AdviceSection:
    target, model = _SIDE_BUSINESS[level]
    lines = [
        "・まずは本業を続けながら、週末や平日夜に副業として事業をスタートさせましょう。",
        f"・月に{target}の副収入を作ることから始め、徐々に拡大していくことで、リスクを抑えられます。",
        "・副業期間中に顧客基盤やスキルを構築できれば、独立時の不安も軽減できます。",
        f"・最初は投資を抑えたビジネスモデル（{model}など）から始めるのも一つの方法です。",
    ]
    if has_children:
        lines.extend(_LOW_SAVINGS_CHILDREN)
    return AdviceSection(SectionKind.LOW_SAVINGS, "貯蓄が少なくても大丈夫", "\n".join(lines))


def _career_risk(has_children: bool) -> AdviceSection:
    lines = list(_CAREER_TEXT)
    if has_children:
        lines.extend(_CAREER_CHILDREN)
    return AdviceSection(SectionKind.CAREER_RISK, "サラリーマンも安泰ではない", "\n".join(lines))


def _encouragement(profile: RiskProfile, has_children: bool) -> AdviceSection:
    if profile is RiskProfile.HIGHEST:
        lines = _ENCOURAGEMENT_HIGHEST
    elif profile is RiskProfile.HIGH:
        lines = _ENCOURAGEMENT_HIGH
    elif has_children:
        lines = _ENCOURAGEMENT_PARENT
    else:
        lines = _ENCOURAGEMENT_DEFAULT
    return AdviceSection(SectionKind.ENCOURAGEMENT, "あなたへの特別なメッセージ", "\n".join(lines))


def action_steps(level: Level, has_children: bool, age: int | None) -> list[str]:
    steps = [*_COMMON_STEPS, *_INCOME_STEPS[level]]
    if has_children:
        steps.extend(_CHILDREN_STEPS)
    if age:
        steps.extend(_AGE_STEPS[age_bracket(age)])
    return steps


def _action_steps(level: Level, has_children: bool, age: int | None) -> AdviceSection:
    steps = action_steps(level, has_children, age)
    body = "\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1))
    return AdviceSection(SectionKind.ACTION_STEPS, "具体的な行動ステップ", body)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compose_sections(
    profile: ApplicantProfile, facts: NormalizedFacts, tiers: ClassificationTiers,
) -> list[AdviceSection]:
    """Build advice sections in construction order.

    The age section depends on the raw age (unspecified → omitted), not on
    facts.effective_age.
    """
    has_children = facts.has_children
    sections = [_funding_goal(profile.savings, profile.monthly_income, tiers)]
    if profile.age:
        sections.append(_age_encouragement(profile.age))
    sections.append(_income_advice(tiers.income_level))
    sections.append(_family_advice(has_children, profile.family_count))
    if profile.savings < tiers.three_months_cost:
        sections.append(_low_savings_advice(tiers.income_level, has_children))
    sections.append(_career_risk(has_children))
    sections.append(_encouragement(tiers.risk_profile, has_children))
    sections.append(_action_steps(tiers.income_level, has_children, profile.age))
    return sections


def generate_advice(
    profile: ApplicantProfile, facts: NormalizedFacts, tiers: ClassificationTiers,
) -> str:
    return serialize_sections(compose_sections(profile, facts, tiers))
