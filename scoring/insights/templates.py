from typing import List, Literal, Tuple

Kind = Literal["insight", "warning", "recommendation"]

# (flag, kind, messages). Emission follows this order; a message is only
# emitted once per list even if several rows carry it.
TEMPLATES: List[Tuple[str, Kind, Tuple[str, ...]]] = [
    # Food
    ("food_nova_1", "insight", ("✨ Non transformé", "🌱 Base saine")),
    ("food_nova_2", "insight", ("🍳 Ingrédient culinaire", "💡 Usage modéré")),
    ("food_nova_3", "insight", ("🏭 Transformé", "📊 Conservateurs simples")),
    ("food_nova_4", "insight", ("⚠️ Ultra-transformé", "🧪 Additifs multiples")),
    ("food_nova_4", "recommendation", ("Produit ultra-transformé. Privilégiez des alternatives moins transformées.",)),
    ("food_nova_ge_3", "recommendation", ("⚡ Consommation occasionnelle", "🏠 Privilégiez maison")),
    ("food_high_risk_additive", "warning", ("🚨 Additifs à risque élevé",)),
    ("food_problematic_additives", "recommendation", ("🔎 Additifs controversés: comparez les alternatives",)),
    ("food_hydrogenated", "warning", ("🚫 Acides gras trans",)),
    ("food_hydrogenated", "insight", ("❤️ Risque cardiovasculaire",)),
    ("food_concern_sucres", "warning", ("🍬 Teneur élevée en sucres",)),
    ("food_concern_graisses saturées", "warning", ("🧈 Teneur élevée en graisses saturées",)),
    ("food_concern_sel", "warning", ("🧂 Teneur élevée en sel",)),
    ("food", "recommendation", ("💡 Variez les sources",)),
    ("food_score_lt_40", "recommendation", ("🥗 Compensez avec du frais", "💧 Hydratez-vous bien")),

    # Cosmetics
    ("cosmetics_endocrine_high", "insight", ("⚠️ Ingrédients préoccupants", "🔬 Composants surveillés")),
    ("cosmetics_disruptor", "warning", ("🚨 Perturbateurs endocriniens", "👶 Éviter grossesse")),
    ("cosmetics_disruptor", "recommendation", ("🔄 Alternatives sans PE",)),
    ("cosmetics_allergens", "insight", ("🌸 Allergènes présents", "💡 Test préalable")),
    ("cosmetics_allergens", "recommendation", ("🔍 Surveillez réactions",)),
    ("cosmetics_natural_high", "insight", ("🌿 Haute naturalité",)),
    ("cosmetics_natural_low", "recommendation", ("🌱 Choisissez des formules plus naturelles", "🏷️ Vérifiez les certifications bio")),
    ("cosmetics", "recommendation", ("💧 Appliquez peau propre", "🌞 Protection solaire jour")),
    ("cosmetics_score_ge_50", "recommendation", ("✨ Formulation saine", "🌿 Bonne tolérance")),
    ("cosmetics_score_lt_50", "recommendation", ("🚫 Ingrédients controversés", "🔄 Cherchez alternatives")),

    # Detergents
    ("detergents_toxicity_high", "warning", ("🐟 Impact aquatique", "💧 Dosez minimum")),
    ("detergents_toxicity_high", "recommendation", ("🚰 Jamais dans nature",)),
    ("detergents_phosphates", "warning", ("🌊 Phosphates: risque d'eutrophisation",)),
    ("detergents_bio_low", "warning", ("♻️ Biodégradabilité limitée", "⏳ Persistant")),
    ("detergents_bio_high", "insight", ("✅ Excellente biodégradabilité",)),
    ("detergents_eco_label", "insight", ("🏆 Certifié écologique",)),
    ("detergents", "recommendation", ("📏 Respectez doses", "🌡️ Lavez froid si possible", "💧 Surdosage inutile")),
    ("detergents_score_ge_50", "recommendation", ("🧼 Impact acceptable", "🌱 Dosage correct")),
    ("detergents_score_lt_50", "recommendation", ("🌍 Impact élevé", "🏆 Préférez écolabel")),

    # Score brackets, every category
    ("score_80", "insight", ("🌟 Excellent !", "💚 Impact minimal")),
    ("score_60", "insight", ("👍 Bon produit", "📊 Performance correcte")),
    ("score_40", "insight", ("⚠️ Moyen", "🔍 Comparez")),
    ("score_0", "insight", ("❌ Problématique", "🚫 Évitez")),
    ("score_lt_60", "recommendation", ("🔍 Comparez options", "💪 Chaque changement compte", "🌍 Impact positif possible")),
]
